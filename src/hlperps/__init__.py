"""hlperps: delegated precheck/execute for opening Hyperliquid perp positions."""

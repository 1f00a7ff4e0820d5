"""Trading core: precheck evaluation and execute orchestration.

Capabilities are consumed through the protocols in ``hlperps.trading.ports``;
this package does not import any connector at module level.
"""

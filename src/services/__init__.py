"""Import, export, reconciliation and state transitions."""

class UnbalancedLedgerError(Exception):
    """Raised when a group of ledger entries fails the double-entry balance check."""
    pass

class DuplicateBillError(Exception):
    """Raised when a farmer bill or tax invoice already exists for the same party and day"""
    pass

class FinalAccountsMismatchError(Exception):
    """Raised when the ledger and trading final-accounts strategies disagree on net profit"""
    pass

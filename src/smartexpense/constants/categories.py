"""
Category labels seeded into every new ledger.
Order matters: it is the display order of the category list and dropdowns.
"""

DEFAULT_CATEGORIES = (
    "Food",
    "Transport",
    "Bills",
    "Shopping",
    "Other",
)

# Transaction kinds as accepted on the command line and stored in snapshots
TRANSACTION_KINDS = (
    "income",
    "expense",
)

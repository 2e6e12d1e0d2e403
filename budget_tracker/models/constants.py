"""Domain constants and enumerations for validation.

Kept as plain sets and mappings; the display order of currencies and
categories follows the tuples below.
"""

from typing import Dict, Set, Tuple

CURRENCY_ORDER: Tuple[str, ...] = (
    "USD",
    "EUR",
    "GBP",
    "JPY",
    "INR",
    "CAD",
    "AUD",
    "CHF",
    "CNY",
    "SGD",
)
CURRENCIES: Set[str] = set(CURRENCY_ORDER)
CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "CAD": "C$",
    "AUD": "A$",
    "CHF": "CHF",
    "CNY": "¥",
    "SGD": "S$",
}
# Currencies displayed without a fractional part
ZERO_DECIMAL_CURRENCIES: Set[str] = {"JPY"}

INCOME = "income"
EXPENSE = "expense"
ENTRY_TYPES: Set[str] = {INCOME, EXPENSE}
FILTER_ALL = "all"
FILTERS: Set[str] = {FILTER_ALL, INCOME, EXPENSE}

CATEGORY_ORDER: Tuple[str, ...] = (
    # Income
    "salary",
    "freelance",
    "investment",
    "other-income",
    # Spending
    "food",
    "transport",
    "bills",
    "shopping",
    "entertainment",
    "other-expense",
)
CATEGORIES: Set[str] = set(CATEGORY_ORDER)

# Local storage keys
ENTRIES_KEY = "budgetEntries"
CURRENCY_KEY = "budgetCurrency"
DARK_MODE_KEY = "darkMode"
DARK_MODE_ENABLED = "enabled"
DARK_MODE_DISABLED = "disabled"

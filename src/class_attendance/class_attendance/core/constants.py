"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PRICE_PER_CLASS = 15
DEFAULT_LATE_DAY_THRESHOLD = 5
DEFAULT_MIN_ACCEPTABLE_AMOUNT = 30
DEFAULT_ON_UNKNOWN_WEEKDAY = "empty"

# Category filter value meaning "every category" in payment listings.
ALL_CATEGORIES = "Todas"

DEFAULT_CASH_CONCEPT = "Pago en efectivo"
DEFAULT_CONCEPTS = (
    "Mensualidad",
    "Minimo Obligatorio",
    "Clase Suelta",
    "Privada",
    "Intensivo",
    "Evento",
)

# Legacy monthly plans: amount -> label, only inside the first days of the month.
PLAN_WINDOW_LAST_DAY = 5
MONTHLY_PROMO_AMOUNT = 45
MONTHLY_FIVE_WEEKS_AMOUNT = 60
MINIMUM_PLAN_AMOUNT = 30

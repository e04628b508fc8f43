"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_DESCRIPTION_LENGTH = 100
DEFAULT_SESSION_HOURS = 2

DEFAULT_BULK_DELETE_CODE = "23"
DEFAULT_DISPLAY_TIMEZONE = "America/Guayaquil"

DEFAULT_TECHNICIANS = (
    "Alex Haro",
    "Carlos Cisneros",
    "César Sánchez",
    "Dario Ojeda",
    "Edisson Bejarano",
    "Israel Pérez",
    "José Urquizo",
    "Juan Carrión",
    "Kevin Vargas",
    "Leonardo Ballesteros",
    "Marlon Ortiz",
    "Miguel Lozada",
    "Roberto Córdova",
)

LAST_TECHNICIAN_KEY = "last_technician"

EXPORT_SHEET_NAME = "Horas Extras"
EXPORT_FILE_NAME = "horas_extras.xlsx"
EXPORT_EMPTY_DESCRIPTION = "Sin descripción"
EXPORT_DATETIME_FORMAT = "dd/mm/yyyy hh:mm"
EXPORT_HOURS_FORMAT = "0.00"

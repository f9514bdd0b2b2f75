"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DEFAULT_TIMEZONE = "UTC"
DEFAULT_PORT = 3001
DEFAULT_POOL_SIZE = 5

TIME_FORMAT = "%H:%M:%S"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

EXPORT_SHEET_NAME = "Registros"
EXPORT_COLUMNS = ("codigo", "turno", "fecha")
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

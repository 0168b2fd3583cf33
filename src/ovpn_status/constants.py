from pathlib import Path

CONFIG_FILE_NAME = "ovpn_status.yaml"
DEFAULT_STATUS_FILE = Path("/var/log/openvpn/openvpn-status.log")
DEFAULT_ENCODING = "utf-8"

# Section markers of the version 1 status layout
CLIENT_LIST_HEADER = "CLIENT LIST"
ROUTING_TABLE_HEADER = "ROUTING TABLE"
GLOBAL_STATS_HEADER = "GLOBAL STATS"
END_MARKER = "END"
UPDATED_PREFIX = "Updated,"

# First column labels of the in-section header rows
CLIENT_COLUMN_LABEL = "Common Name"
ROUTE_COLUMN_LABEL = "Virtual Address"

MAX_QUEUE_LABEL = "queue length"

# English names used by status timestamps, whatever the process locale
WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

REMOTE_ROUTE_SUFFIX = "C"
FIELD_SEPARATOR = ","

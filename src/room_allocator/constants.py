"""Constants for hotel room allocation."""

# Processing priority by client type (lower sorts first)
CLIENT_TYPE_PRIORITY = {
    "VIP": 1,
    "Influencer": 2,
    "Staff": 3,
    "Group": 4,
    "Solo": 5,
}

# Client types without an entry in CLIENT_TYPE_PRIORITY (e.g. Standard)
# sort after every known type
UNRANKED_PRIORITY = len(CLIENT_TYPE_PRIORITY) + 1

# Largest batch placed in one room when a group is split or solos are chunked
MAX_CHUNK_SIZE = 4

# Rooms below this utilization are topped up by the occupancy optimizer
UNDERUTILIZED_THRESHOLD = 75

# Average occupancy below this triggers a warning
LOW_OCCUPANCY_THRESHOLD = 60

# Group size above which an unassigned member is reported as "group too large"
LARGE_GROUP_SIZE = MAX_CHUNK_SIZE

# Relation that lets a two-person mixed group share a room
COUPLE_RELATION = "Couple"

# Sub-group suffixes used when a mixed group is split by gender
MEN_SUFFIX = "(Men)"
WOMEN_SUFFIX = "(Women)"

# Heuristic reasons reported for unassigned clients
REASON_GROUP_TOO_LARGE = "group too large"
REASON_MANUAL_ASSIGNMENT = "requires manual assignment"
REASON_INSUFFICIENT_CAPACITY = "insufficient capacity"

# Default allocation rules
DEFAULT_RULES = {
    "allow_mixed_rooms": False,
    "vip_can_be_mixed": True,
    "keep_groups_together": True,
    "optimize_occupancy": True,
}

# Client roster columns (CSV / Excel)
CLIENT_COLUMNS = [
    "id",
    "first_name",
    "last_name",
    "gender",
    "client_type",
    "group_name",
    "group_size",
    "group_relation",
]
CLIENT_REQUIRED_COLUMNS = ["id", "gender", "client_type"]

# Hotel inventory columns (CSV / Excel), one row per room type
HOTEL_COLUMNS = ["hotel_id", "hotel_name", "room_type", "capacity", "quantity"]
HOTEL_REQUIRED_COLUMNS = ["hotel_id", "room_type", "capacity", "quantity"]

# File formats accepted by the loaders
SUPPORTED_INPUT_SUFFIXES = {".json", ".csv", ".xlsx"}

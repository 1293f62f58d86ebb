"""
Android battery-history domain knowledge — the single source of truth.

Every table here is read-only after import: the symbol and enum tables are
wrapped in MappingProxyType and the event-name lists are tuples, so a single
copy is safely shared by every decode running in the process.
"""

from types import MappingProxyType

# ---------------------------------------------------------------------------
# Checkin dump record prefixes
# ---------------------------------------------------------------------------

STRING_TABLE_PREFIX = "9,hsp,"
HISTORY_PREFIX = "9,h,"
RESET_PREFIX = "0:RESET:TIME:"

# ---------------------------------------------------------------------------
# logcat dump framing
# ---------------------------------------------------------------------------

LOGCAT_SECTION_MARKER = "--------- beginning of "
LOGCAT_FORMAT = "epoch,UTC,usec,printable,long"
LOGCAT_DEFAULT_TAIL = 1000  # lines requested when no start time is given


# ---------------------------------------------------------------------------
# Short battery-history codes → long names
# ---------------------------------------------------------------------------
# Mirrors BatteryStats' checkin history item names. Applied to the bare code
# (prefix stripped) and to the key of "<code>=<value>" codes.

SYMBOL_NAMES = MappingProxyType({
    "r": "running",
    "w": "wake_lock",
    "s": "sensor",
    "g": "gps",
    "Wl": "wifi_full_lock",
    "Ws": "wifi_scan",
    "Wm": "wifi_multicast",
    "Wr": "wifi_radio",
    "Pr": "mobile_radio",
    "Psc": "phone_scanning",
    "a": "audio",
    "S": "screen",
    "BP": "plugged",
    "Sd": "screen_doze",
    "Pcn": "data_conn",
    "Pst": "phone_state",
    "Pss": "phone_signal_strength",
    "Sb": "brightness",
    "ps": "power_save",
    "v": "video",
    "Ww": "wifi_running",
    "W": "wifi",
    "fl": "flashlight",
    "di": "device_idle",
    "ch": "charging",
    "Ud": "usb_data",
    "Pcl": "phone_in_call",
    "b": "bluetooth",
    "Wss": "wifi_signal_strength",
    "Wsp": "wifi_suppl",
    "ca": "camera",
    "bles": "ble_scan",
    "Chtp": "cellular_high_tx_power",
    "Gss": "gps_signal_quality",
    "nrs": "nr_state",
    "Bl": "battery_level",
    "Bs": "battery_status",
    "Bh": "battery_health",
    "Bp": "plug",
    "Bt": "battery_temperature",
    "Bv": "battery_voltage_mV",
    "Bcc": "charge_mAh",
    "Mrc": "modemRailCharge_mAh",
    "Wrc": "wifiRailCharge_mAh",
    "wr": "wake_reason",
    "Ev": "event",
})


# ---------------------------------------------------------------------------
# Enumerated values, keyed by the short code that carries them
# ---------------------------------------------------------------------------

VALUE_NAMES = MappingProxyType({
    "Pst": MappingProxyType({
        "in": "in",
        "out": "out",
        "em": "emergency",
        "off": "off",
    }),
    "Pss": MappingProxyType({
        "0": "none",
        "1": "poor",
        "2": "moderate",
        "3": "good",
        "4": "great",
    }),
    "Sb": MappingProxyType({
        "0": "dark",
        "1": "dim",
        "2": "medium",
        "3": "light",
        "4": "bright",
    }),
    "Wsp": MappingProxyType({
        "inv": "invalid",
        "dsc": "disconn",
        "dis": "disabled",
        "inact": "inactive",
        "scan": "scanning",
        "auth": "authenticating",
        "ascing": "associating",
        "asced": "associated",
        "4-way": "4-way-handshake",
        "group": "group-handshake",
        "compl": "completed",
        "dorm": "dormant",
        "uninit": "uninit",
    }),
    "nrs": MappingProxyType({
        "0": "none",
        "1": "restricted",
        "2": "not_restricted",
        "3": "connected",
    }),
    "Bs": MappingProxyType({
        "?": "unknown",
        "c": "charging",
        "d": "discharging",
        "n": "not-charging",
        "f": "full",
    }),
    "Bh": MappingProxyType({
        "?": "unknown",
        "g": "good",
        "h": "overheat",
        "d": "dead",
        "v": "over-voltage",
        "f": "failure",
        "c": "cold",
    }),
    "Bp": MappingProxyType({
        "n": "none",
        "a": "ac",
        "u": "usb",
        "w": "wireless",
    }),
})


# ---------------------------------------------------------------------------
# History event names used by "E<xx>=<string table index>" codes
# ---------------------------------------------------------------------------
# Parallel tuples: SHORT_EVENT_NAMES[i] is printed as LONG_EVENT_NAMES[i].

LONG_EVENT_NAMES = (
    "null", "proc", "fg", "top", "sync", "wake_lock_in", "job", "user",
    "userfg", "conn", "active", "pkginst", "pkgunin", "alarm", "stats",
    "pkginactive", "pkgactive", "tmpwhitelist", "screenwake", "wakeupap",
    "longwake", "est_capacity",
)
SHORT_EVENT_NAMES = (
    "nl", "pr", "fg", "tp", "sy", "wl", "jb", "ur", "uf", "cn", "ac", "pi",
    "pu", "al", "st", "ai", "aa", "tw", "sw", "wa", "lw", "ec",
)
EVENT_NAMES = MappingProxyType(dict(zip(SHORT_EVENT_NAMES, LONG_EVENT_NAMES)))

# Owner id printed for string table entries that belong to no app
NO_UID = "0"


# ---------------------------------------------------------------------------
# Marker wire format
# ---------------------------------------------------------------------------

MARKER_SCHEMA = MappingProxyType({
    "name": 0,
    "startTime": 1,
    "endTime": 2,
    "phase": 3,
    "category": 4,
    "data": 5,
})

BATTERY_MARKER_TYPE = "abs"
LOGCAT_MARKER_TYPE = "alc"

BATTERY_CATEGORY_INDEX = 0
LOGCAT_CATEGORY_INDEX = 1

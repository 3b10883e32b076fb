import re

# read-only guard
_FORBIDDEN = re.compile(
    r"\b(INSERT|UPDATE|DELETE|DROP|ALTER|TRUNCATE|MERGE|CREATE|EXEC|EXECUTE|GRANT|REVOKE|"
    r"ATTACH|DETACH|INTO|BACKUP|RESTORE|SHUTDOWN|DBCC)\b",
    re.I,
)
_START_OK = re.compile(r"^\s*SELECT\b", re.I)
_STRING_LITERAL = re.compile(r"N?'(?:[^']|'')*'")
_COMMENT = re.compile(r"--[^\n]*|/\*.*?\*/", re.S)

# model output cleanup
_JSON_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.I | re.S)
_THINK_TAGS = re.compile(r"<\s*think\s*>.*?<\s*/\s*think\s*>", re.I | re.S)

# conversation routing
_SMALLTALK = re.compile(
    r"^\s*(hi|hello|hey|g'?day|good (?:morning|afternoon|evening)|thanks|thank you|bye)\b[\s!.,?]*$",
    re.I,
)
_HELP = re.compile(r"^\s*(help|what can you do|how do i use (?:this|you))\b", re.I)

# row-count phrases
_WORD_NUMBERS = {
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5, "six": 6, "seven": 7,
    "eight": 8, "nine": 9, "ten": 10, "eleven": 11, "twelve": 12, "fifteen": 15,
    "twenty": 20, "thirty": 30, "fifty": 50, "hundred": 100,
}
_COUNT_TOKEN = r"(\d+|" + "|".join(sorted(_WORD_NUMBERS, key=len, reverse=True)) + r")"
# "last 3 months" is a time window, not a row count
_TIME_UNIT = r"(?:days?|weeks?|months?|quarters?|years?)\b"
_NUM_PHRASE = re.compile(
    r"\b(?:top|first|last|bottom|highest|lowest|largest|biggest|smallest|latest|"
    r"most recent|oldest|newest|limit(?: to)?)\s+" + _COUNT_TOKEN + r"\b(?!\s*(?:%|percent|" + _TIME_UNIT + r"))",
    re.I,
)
_SHOW_N = re.compile(
    r"\b(?:show|list|give|get)(?: me)?\s+(?:the\s+)?(\d{1,3}|"
    + "|".join(sorted(_WORD_NUMBERS, key=len, reverse=True))
    + r")\s+(?!%|percent|" + _TIME_UNIT + r")[a-z]",
    re.I,
)
_NUM_RESULTS = re.compile(r"\b" + _COUNT_TOKEN + r"\s+(?:results|rows|records)\b", re.I)
_SINGLE_PHRASE = re.compile(
    r"\bthe\s+(?:single\s+)?(?:top|highest|largest|biggest|lowest|smallest|latest|most recent|"
    r"newest|oldest|first|last)\s+(?:[a-z]+\s+)?"
    r"(?:supplier|vendor|invoice|line item|item|product|contract|lhn)\b(?!s)",
    re.I,
)

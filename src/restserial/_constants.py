DEFAULT_MAX_PATH_LENGTH = 5
DEFAULT_USER_AGENT = "restserial-python"

INPUT_DATA_NIL_REASON = "Data could not be serialized. Input data was nil."
JSON_PARSE_FAILED_REASON = "Data could not be serialized. Failed to parse JSON response."

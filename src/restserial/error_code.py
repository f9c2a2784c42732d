from enum import Enum


class Code(str, Enum):
    SUCCESS = "success"
    TRANSPORT_ERROR = "transport_error"
    PAYLOAD_ABSENT = "payload_absent"
    SNIFFER_REPORTED_ERROR = "sniffer_reported_error"
    MALFORMED_PAYLOAD = "malformed_payload"


class AppMessage:
    EMPTY_FILTER_STRING = 'filter string is empty'
    MALFORMED_FILTER_STRING = 'filter string could not be parsed'
    WHOLE_DOCUMENT_REQUIRES_MATCHES = "whole document key '@' only supports MATCHES terms"
    SINGLE_VALUE_PAYLOAD = 'serialized term must carry exactly one value'
    INVALID_PAYLOAD = 'serialized term is invalid'
    UNKNOWN_KIND = 'unknown comparison kind'

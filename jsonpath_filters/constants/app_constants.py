
class AppConstants:
    # whole document sentinel, a term with this key tests JSON.stringify(@)
    WHOLE_DOCUMENT_KEY = '@'

    # compact filter string separators
    EQUALS_SEPARATOR = ':'
    MATCHES_SEPARATOR = '~'
    VALUE_SEPARATOR = ','

    # serialized term fields
    displayKey = 'displayKey'

    # json path fragments
    JSON_PATH_ROOT = '$'
    OR = '||'
    AND = '&&'

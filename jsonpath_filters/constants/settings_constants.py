
class SettingsConstants:
    STRICT_TERMS = 'FILTER_STRICT_TERMS'
    STRICT_TERMS_DEFAULT = 'true'
    FALSE_VALUES = ('false', '0', 'no', 'off')

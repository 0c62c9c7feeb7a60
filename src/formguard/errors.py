"""Configuration errors raised while building rule descriptors and form definitions.

The validation engine itself never raises: rule failures are strings attached
to fields. These exceptions cover malformed configuration only.
"""


class FormguardError(Exception):
    """Base class for formguard configuration errors."""
    pass


class RuleDefinitionError(FormguardError):
    """A field's rule descriptor is malformed (unknown key, bad bound, bad regex)."""
    pass


class FormDefinitionError(FormguardError):
    """A YAML form definition is malformed or duplicates another form."""
    pass

"""Logic for deciding which declarations take part in documentation association."""

from apidocs.declarations import Class, Declaration, Function
from apidocs.translation_unit import TranslationUnit


def is_unit_eligible(unit: TranslationUnit) -> bool:
    """Check if a translation unit is generated and not a system header."""
    return unit.generated and not unit.system_header


def is_eligible(decl: Declaration) -> bool:
    """Check if a declaration should receive documentation."""
    if not decl.generated or decl.system_header:
        return False
    if isinstance(decl, Class) and decl.incomplete:
        return False
    return not (isinstance(decl, Function) and decl.implicit)

class RegistrarError(Exception):
    """Base class for every error a registrar operation raises"""


class NotFoundError(RegistrarError):
    """Referenced entity or key does not exist"""


class DuplicateError(RegistrarError):
    """An existing row already holds this unique key"""


class ConflictError(RegistrarError):
    """Availability or uniqueness precondition failed at commit time"""


class CapacityError(RegistrarError):
    """The session has no free seats left"""


class ClashError(RegistrarError):
    """The student is already enrolled in a session at the same timeslot"""


class ValidationError(RegistrarError):
    """A caller-supplied value is out of its allowed range"""


class ScopeError(RegistrarError):
    """A portal caller acted outside its own courses or students"""

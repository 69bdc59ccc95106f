class UnitNotInitialized(Exception):
    """ Raised when a unit is used before its weights exist or before the
    state required by the operation has been established
    """


class UnitAlreadyInitialized(Exception):
    """ Raised when attempting to re-wire or re-randomize a unit whose
    weights have already been created
    """


class DimensionMismatch(ValueError):
    """ Raised when a vector length disagrees with the number of units it
    is meant to populate
    """

"""Error taxonomy for meal plan operations.

Every failure the engine reports derives from MealPlanError, so the command
layer can catch one type and render its message.
"""


class MealPlanError(Exception):
    """Base class for all recoverable meal plan errors."""


class InvalidMealType(MealPlanError):
    pass


class InvalidDay(MealPlanError):
    pass


class EmptyField(MealPlanError):
    pass


class MealNotFound(MealPlanError):
    pass


class MalformedDocument(MealPlanError):
    """A Markdown (or generated calendar) document could not be processed."""


class MalformedJson(MealPlanError):
    pass


class IoError(MealPlanError):
    pass


class NotFound(MealPlanError):
    pass


__all__ = [
    'MealPlanError', 'InvalidMealType', 'InvalidDay', 'EmptyField', 'MealNotFound',
    'MalformedDocument', 'MalformedJson', 'IoError', 'NotFound'
]

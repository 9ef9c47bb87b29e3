from dishka import Provider as DishkaProvider


class Provider(DishkaProvider):
    """Base for all HT6 DI providers.

    Providers declare their factories with explicit ``Scope`` values from
    ``ht6.util.di.scope``; there is no default scope.
    """

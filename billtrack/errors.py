from __future__ import annotations


class BillingError(Exception):
    """Base des erreurs de validation du moteur de facturation.

    Ne dérive pas de ValueError: levée depuis un validateur pydantic,
    l'erreur remonte telle quelle au lieu d'être enveloppée dans
    ValidationError.
    """


class InvalidAmount(BillingError):
    pass


class InvalidQuantity(BillingError):
    pass


class InvalidPrice(BillingError):
    pass


class InvalidTaxRate(BillingError):
    pass


class InvalidStatus(BillingError):
    pass

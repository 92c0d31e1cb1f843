"""Which quote templates require premium."""

from apps.accounts.models import User

from .exceptions import PremiumTemplateError
from .status import is_premium_user

FREE_TEMPLATES = ('classic', 'modern', 'minimal')
PREMIUM_TEMPLATES = ('corporate', 'creatif', 'artisan', 'elegant', 'professionnel', 'minimaliste')


def is_premium_template(template: str) -> bool:
    return template in PREMIUM_TEMPLATES


def check_template_access(*, user: User, template: str) -> None:
    """
    Raises:
        PremiumTemplateError: If a free user picks a premium template
    """
    if is_premium_template(template) and not is_premium_user(user=user):
        raise PremiumTemplateError(
            f"Le modèle « {template} » est réservé aux utilisateurs Premium"
        )

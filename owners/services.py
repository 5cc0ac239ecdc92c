import logging

from common.exceptions import BusinessRuleError
from users import services as account_services

logger = logging.getLogger(__name__)


def delete_owner(owner) -> None:
    if owner.properties.exists():
        logger.warning("Refused to delete owner %s: it has properties", owner.pk)
        raise BusinessRuleError("The owner can't be deleted because it has properties.")
    if owner.contracts.exists():
        logger.warning("Refused to delete owner %s: it has contracts", owner.pk)
        raise BusinessRuleError("The owner can't be deleted because it has contracts.")
    account_services.delete_profile(owner)

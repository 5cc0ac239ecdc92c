import logging

from common.exceptions import BusinessRuleError
from users import services as account_services

logger = logging.getLogger(__name__)


def delete_lessee(lessee) -> None:
    if lessee.contracts.exists():
        logger.warning("Refused to delete lessee %s: it has contracts", lessee.pk)
        raise BusinessRuleError("The lessee can't be deleted because it has contracts.")
    account_services.delete_profile(lessee)

import ipaddress
import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


def is_in_network(host: Optional[str], trusted_networks: Iterable[str]) -> bool:
    """
    Check whether a client address belongs to one of the trusted networks.

    Unknown or unparsable addresses are never trusted.
    """
    if not host:
        return False
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        logger.warning(f"Unparsable client address: {host}")
        return False

    for network in trusted_networks:
        if address in ipaddress.ip_network(network, strict=False):
            return True
    return False

"""Local network address discovery for the startup banner."""
import logging
import socket

logger = logging.getLogger(__name__)


def get_local_ip() -> str:
    """First non-loopback IPv4 address of this host, or 'localhost'.

    Connecting a UDP socket sends nothing; it only makes the OS pick the
    outgoing interface.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect(("10.255.255.255", 1))
        address = sock.getsockname()[0]
    except OSError as e:
        logger.debug(f"No LAN route found: {e}")
        return "localhost"
    finally:
        sock.close()

    if address.startswith("127.") or address == "0.0.0.0":
        return "localhost"
    return address

import random

from solar_soc.modules.catalog import FIREWALL_PORTS


# Excluded first octets for realism
_EXCLUDED_PREFIXES = [
    0,      # "This" network
    10,     # Private
    127,    # Loopback
    169,    # Link-local
    172,    # Private (172.16.0.0/12 but we exclude whole 172 to stay simple)
    192,    # Often private (192.168.x.x), we exclude whole to be safe
    224,    # Multicast
    225, 226, 227, 228, 229, 230, 231,
    232, 233, 234, 235, 236, 237, 238, 239,  # Multicast block
    255,    # Broadcast
]


def random_ip(rng: random.Random) -> str:
    """
    Generate a random public-Internet-style IPv4 address
    excluding private/reserved/broken ranges.
    Used for attacker / remote source addresses.
    """
    while True:
        a = rng.randint(1, 254)
        if a in _EXCLUDED_PREFIXES:
            continue

        b = rng.randint(0, 254)
        c = rng.randint(0, 254)
        d = rng.randint(1, 254)

        return f"{a}.{b}.{c}.{d}"


def random_grid_ip(rng: random.Random) -> str:
    """
    Address inside the plant network (192.168.0.0/16).
    """
    return f"192.168.{rng.randint(0, 254)}.{rng.randint(0, 254)}"


def random_grid_port(rng: random.Random) -> int:
    """
    Return a port from the pool seen at the grid edge (web, ssh, telnet, ICS protocols).
    """
    return rng.choice(FIREWALL_PORTS)

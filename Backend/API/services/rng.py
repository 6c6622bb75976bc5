import hashlib, secrets
from typing import Iterator

BLOCK_BYTES = 32                      # sha256 digest size
MAX_EXPAND_ROUNDS = 256               # block index is packed into a single byte
MAX_BITS = BLOCK_BYTES * 8 * (1 + MAX_EXPAND_ROUNDS)


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def generate_server_seed() -> str:
    """32 bytes from the OS CSPRNG, as 64 hex chars."""
    return secrets.token_hex(BLOCK_BYTES)


def commit(server_seed: str) -> str:
    return sha256(server_seed.encode()).hex()


def rng_buffer(server_seed: str, client_seed: str, nonce: str, expand_rounds: int = 4) -> bytes:
    """base = sha256("seed:client:nonce"), then sha256(base || i) for each round i."""
    if not 0 <= expand_rounds <= MAX_EXPAND_ROUNDS:
        raise ValueError(f"expand_rounds must be in [0, {MAX_EXPAND_ROUNDS}]")
    base = sha256(f"{server_seed}:{client_seed}:{nonce}".encode())
    out = bytearray(base)
    for i in range(expand_rounds):
        out += sha256(base + bytes([i]))
    return bytes(out)


def iter_bits(buf: bytes) -> Iterator[int]:
    """Yield every bit of buf, MSB first. Stops when buf runs out."""
    for byte in buf:
        for i in range(7, -1, -1):
            yield (byte >> i) & 1


def derive_bits(server_seed: str, client_seed: str, nonce: str, bits_needed: int) -> list[int]:
    """
    First `bits_needed` bits of the round's stream.

    The buffer is always built from whole blocks, so shorter requests are a
    prefix of longer ones for the same (seed, client, nonce).
    """
    if bits_needed < 0:
        raise ValueError("bits_needed must be >= 0")
    if bits_needed == 0:
        return []
    if bits_needed > MAX_BITS:
        raise ValueError(f"at most {MAX_BITS} bits can be derived per round")
    block_bits = BLOCK_BYTES * 8
    blocks = -(-bits_needed // block_bits)
    buf = rng_buffer(server_seed, client_seed, nonce, expand_rounds=blocks - 1)
    return list(iter_bits(buf))[:bits_needed]

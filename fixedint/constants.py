"""Word geometry and algorithm defaults."""

WORD_BITS = 32
WORD_MASK = 0xFFFFFFFF
DEFAULT_BITS = 64

# Number of Fermat rounds performed by prime_check
FERMAT_TRIALS = 100

import sys

from fixedint import FixedInt, set_seed


def generate_rsa_keypair(key_size=1024):
    """
    Generate a reference RSA keypair with the cryptography package.
    :param key_size: Key size in bits (cryptography requires at least 1024).
    :return: Tuple (p, q, n, e, d) of Python integers where:
             - p, q: Prime numbers
             - n: Modulus (p * q)
             - e: Public exponent
             - d: Private exponent
    """
    from cryptography.hazmat.primitives.asymmetric import rsa
    from cryptography.hazmat.backends import default_backend

    private_key = rsa.generate_private_key(
        public_exponent=65537,  # Commonly used public exponent
        key_size=key_size,
        backend=default_backend()
    )

    private_numbers = private_key.private_numbers()
    public_numbers = private_key.public_key().public_numbers()

    return (private_numbers.p, private_numbers.q, public_numbers.n,
            public_numbers.e, private_numbers.d)


def to_fixed(value, bits):
    """Convert a Python integer into a FixedInt through its hex form."""
    return FixedInt(format(value, 'x'), bits=bits)


def generate_prime(bits, prime_bits, trials=20):
    """
    Draw random odd candidates with the top bit set until one passes the Fermat test.
    :param bits: Width of the FixedInt holding the prime.
    :param prime_bits: Bit length of the prime.
    """
    top = FixedInt.one(bits) << (prime_bits - 1)
    while True:
        candidate = FixedInt.random(bits, prime_bits - 1) + top
        if candidate.is_even():
            candidate = candidate + 1
        if candidate.prime_check(trials=trials):
            return candidate


class TextbookRSA:
    """
    Unpadded RSA on FixedInt values. Not for real use: no padding, no
    constant-time arithmetic.
    """
    PUBLIC_EXPONENT = 65537

    def __init__(self, bits=128, prime_bits=32):
        # n = p*q takes 2*prime_bits
        if 2 * prime_bits > bits:
            raise ValueError(f"{bits}-bit width is too small for {prime_bits}-bit primes")
        self.bits = bits
        e = FixedInt(self.PUBLIC_EXPONENT, bits=bits)
        while True:
            p = generate_prime(bits, prime_bits)
            q = generate_prime(bits, prime_bits)
            phi = (p - 1) * (q - 1)
            if p != q and e.gcd(phi) == 1:
                break
        self.p, self.q = p, q
        self.n = p * q
        self.e = e
        self.d = e.inverse(phi)

    def encrypt(self, message):
        return message.exponentiation(self.e, self.n)

    def decrypt(self, ciphertext):
        return ciphertext.exponentiation(self.d, self.n)


def check_against_reference(key_size=1024):
    """
    Cross-check FixedInt against a cryptography-generated key: the CRT
    coefficient q^-1 mod p and the public operation m^e mod n.
    """
    from cryptography.hazmat.primitives.asymmetric import rsa

    p, q, n, e, _ = generate_rsa_keypair(key_size)
    bits = key_size

    iqmp = to_fixed(q, bits).inverse(to_fixed(p, bits))
    print("q^-1 mod p matches:", int(iqmp) == rsa.rsa_crt_iqmp(p, q))

    message = 0x123456789ABCDEF
    ciphertext = to_fixed(message, bits).exponentiation(to_fixed(e, bits), to_fixed(n, bits))
    print("m^e mod n matches:", int(ciphertext) == pow(message, e, n))


if __name__ == "__main__":
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else None
    set_seed(seed)

    rsa_demo = TextbookRSA(bits=128, prime_bits=32)
    print(f"p (prime): {rsa_demo.p}")
    print(f"q (prime): {rsa_demo.q}")
    print(f"n (modulus): {rsa_demo.n}")
    print(f"e (public exponent): {rsa_demo.e}")
    print(f"d (private exponent): {rsa_demo.d}")

    messages = [FixedInt(0x1234567, bits=128), FixedInt(0xCAFEBABE, bits=128)]
    print("messages:", [str(m) for m in messages])

    ciphertexts = [rsa_demo.encrypt(m) for m in messages]
    print("Ciphertexts:", [str(c) for c in ciphertexts])

    decrypted_messages = [rsa_demo.decrypt(c) for c in ciphertexts]
    print("Decrypted messages:", [str(m) for m in decrypted_messages])

    if decrypted_messages == messages:
        print("Success: Decrypted messages match the originals.")
    else:
        print("Failure: Decrypted messages do not match the originals.")

    check_against_reference()

from datetime import timedelta

SESSION_COOKIE_NAME = 'session'
TOKEN_TTL = timedelta(hours=1)
TOKEN_ALGORITHM = 'HS256'
SIGNING_KEY_BYTES = 32

# scrypt N=2**15, r=8, p=1 (~32 MiB per hash); werkzeug embeds method and salt in the digest
PASSWORD_HASH_METHOD = 'scrypt:32768:8:1'
PASSWORD_SALT_LENGTH = 16

import secrets
import string

USER_ID_ALPHABET = string.ascii_uppercase + string.digits
USER_ID_LENGTH = 6


def generate_user_id(role):
    suffix = ''.join(secrets.choice(USER_ID_ALPHABET) for _ in range(USER_ID_LENGTH))
    return f"{role}_{suffix}"

from .password import check_password, hash_password
from .token import PHONE_NUMBER_CLAIM, decode_token, issue_token

__all__ = ["hash_password", "check_password", "issue_token", "decode_token", "PHONE_NUMBER_CLAIM"]

"""Holds the pending account-deletion confirmation token."""

from typing import Optional


class ConfirmationTokenStore:
    """
    One token and the message that came with it.

    Issuing and expiring tokens is the server's job; this only remembers
    the last one between the two delete calls.
    """

    def __init__(self):
        self._token: Optional[str] = None
        self._message: Optional[str] = None

    def set_token(self, token: str, message: Optional[str] = None) -> None:
        self._token = token
        self._message = message

    def get_token(self) -> Optional[str]:
        return self._token

    def get_confirmation_message(self) -> Optional[str]:
        return self._message

    def clear_token(self) -> None:
        self._token = None
        self._message = None

import typing as t

import pytest

from common.utils import mail_is_configured


def test_mail_is_configured() -> None:
    assert mail_is_configured() is True


@pytest.mark.parametrize(
    "user,password",
    [("", "app-password"), ("mailer@example.com", ""), ("", "")],
)
def test_mail_is_not_configured_without_both_credentials(settings: t.Any, user: str, password: str) -> None:
    settings.EMAIL_HOST_USER = user
    settings.EMAIL_HOST_PASSWORD = password

    assert mail_is_configured() is False

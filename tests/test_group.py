import pytest

from oaspec.group import (
    GroupConfig,
    group_deprecated,
    group_hidden,
    group_security,
    group_tags,
)
from oaspec.operation import OperationSecurityConfig


def test_group_tags_single():
    cfg = GroupConfig()
    group_tags("auth")(cfg)
    assert cfg.tags == ["auth"]


def test_group_tags_multiple():
    cfg = GroupConfig()
    group_tags("auth", "user", "admin")(cfg)
    assert cfg.tags == ["auth", "user", "admin"]


def test_group_tags_appends():
    cfg = GroupConfig(tags=["existing"])
    group_tags("new")(cfg)
    assert cfg.tags == ["existing", "new"]


def test_group_security_without_scopes():
    cfg = GroupConfig()
    group_security("oauth2")(cfg)
    assert cfg.security == [OperationSecurityConfig(name="oauth2")]


def test_group_security_with_scopes():
    cfg = GroupConfig()
    group_security("oauth2", "read", "write")(cfg)
    assert cfg.security == [OperationSecurityConfig(name="oauth2", scopes=["read", "write"])]


def test_group_security_appends():
    cfg = GroupConfig(security=[OperationSecurityConfig(name="existing", scopes=["scope1"])])
    group_security("oauth2", "read")(cfg)
    assert cfg.security == [
        OperationSecurityConfig(name="existing", scopes=["scope1"]),
        OperationSecurityConfig(name="oauth2", scopes=["read"]),
    ]


@pytest.mark.parametrize(
    ("args", "expected"),
    [((), True), ((True,), True), ((False,), False), ((False, True, False), False)],
)
def test_group_hidden(args, expected):
    cfg = GroupConfig()
    group_hidden(*args)(cfg)
    assert cfg.hide is expected


@pytest.mark.parametrize(
    ("args", "expected"),
    [((), True), ((True,), True), ((False,), False), ((False, True, False), False)],
)
def test_group_deprecated(args, expected):
    cfg = GroupConfig()
    group_deprecated(*args)(cfg)
    assert cfg.deprecated is expected
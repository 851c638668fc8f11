import pytest

from oaspec.parser import ColonParamParser


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/users/:id", "/users/{id}"),
        ("/users/:userId/posts/:postId", "/users/{userId}/posts/{postId}"),
        ("/users", "/users"),
        ("/users/:user_id", "/users/{user_id}"),
        ("/api/v1/:id123", "/api/v1/{id123}"),
        ("/:id", "/{id}"),
        ("/api/:version/users/:id/profile", "/api/{version}/users/{id}/profile"),
        ("", ""),
        ("/users/:_id", "/users/{_id}"),
    ],
)
def test_parse(path, expected):
    assert ColonParamParser().parse(path) == expected


def test_parse_is_idempotent():
    parser = ColonParamParser()
    once = parser.parse("/a/:x/b/:y")
    assert parser.parse(once) == once
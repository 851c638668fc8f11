from oaspec.server import Server, ServerVariable, server_description, server_variables


def test_server_description_sets_value():
    server = Server(url="https://api.example.com")
    server_description("Production server")(server)
    assert server.description == "Production server"
    assert server.url == "https://api.example.com"


def test_server_defaults_have_no_description_or_variables():
    server = Server(url="https://api.example.com")
    assert server.description is None
    assert server.variables is None


def test_server_variables_sets_mapping():
    variables = {
        "version": ServerVariable(default="v1", description="API version", enum=["v1", "v2"])
    }
    server = Server(url="https://api.example.com/{version}")
    server_variables(variables)(server)
    assert server.variables == variables
    assert server.variables["version"].enum == ["v1", "v2"]


def test_later_option_overrides_earlier():
    server = Server(url="https://api.example.com")
    server_description("first")(server)
    server_description("second")(server)
    assert server.description == "second"


def test_options_combine():
    variables = {"region": ServerVariable(default="eu")}
    server = Server(url="https://{region}.example.com")
    for option in (server_description("Regional"), server_variables(variables)):
        option(server)
    assert server == Server(
        url="https://{region}.example.com", description="Regional", variables=variables
    )
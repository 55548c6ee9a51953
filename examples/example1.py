"""A small design: two people and one system with a nested component.

    neoarch save examples/example1.py:build
    neoarch export dsl examples/example1.py:build
"""

from __future__ import annotations

from neoarch import Design
from neoarch.config.models import ModelConfig


def build(config: ModelConfig | None = None) -> Design:
    config = config or ModelConfig()
    design = Design(
        "Example 1",
        "Something",
        implied_use=config.implied_use,
        on_duplicate=config.on_duplicate,
    )

    user = design.person("User", "Any internet user").external().tag("person")
    developer = design.person("Developer", "developer/employee").tag("person").tag("developer")
    user.interacts_with(developer, "Interacts with developer")

    some_system = design.system("SomeSystem", "API system").tag("system")
    api = some_system.container("API", "Backend API").tag("system")
    (
        api.component("GraphQL", "GraphQL API")
        .used_by(user, "Uses the API")
        .tag("component")
        .tag("graphql")
    )

    return design

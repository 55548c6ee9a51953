"""Tests for the Structurizr DSL serializer."""

from __future__ import annotations

from neoarch.domain.design import Design
from neoarch.services.structurizr import NO_ROOT, quote, reference, to_structurizr_dsl


def model_block(dsl: str) -> list[str]:
    lines = dsl.splitlines()
    start = lines.index("    model {")
    end = lines.index("    }", start)
    return lines[start + 1 : end]


def views_block(dsl: str) -> list[str]:
    lines = dsl.splitlines()
    start = lines.index("    views {")
    return lines[start + 1 : -2]


class TestSingleEmptySystem:
    def test_exact_output(self) -> None:
        design = Design("Solo", "One system")
        design.system("Core", "Does things")

        assert to_structurizr_dsl(design) == (
            'workspace "Solo" "One system" {\n'
            "    !identifiers hierarchical\n"
            "\n"
            "    model {\n"
            '        Core = softwareSystem "Core" "Does things"\n'
            "\n"
            "    }\n"
            "\n"
            "    views {\n"
            '        systemContext Core "SystemContext-Core" {\n'
            "            include *\n"
            "            autolayout lr\n"
            "        }\n"
            '        container Core "Containers-Core" {\n'
            "            include *\n"
            "            autolayout lr\n"
            "        }\n"
            "    }\n"
            "}\n"
        )

    def test_no_relationship_lines(self) -> None:
        design = Design("Solo")
        design.system("Core")
        assert not any("->" in line for line in model_block(to_structurizr_dsl(design)))


class TestModelBlock:
    def test_nesting_and_tags(self, shop: Design) -> None:
        model = model_block(to_structurizr_dsl(shop))
        assert model[:12] == [
            '        person_User = person "User" "A customer"',
            '        Shop = softwareSystem "Shop" "Storefront" {',
            '            tags "core"',
            '            Web = container "Web" "Browser UI"',
            '            DB = container "DB" "Orders"',
            "        }",
            '        Payments = softwareSystem "Payments" "Takes payments" {',
            '            Gateway = container "Gateway" "Card API" {',
            '                Tokenizer = component "Tokenizer" "Stores card tokens"',
            "            }",
            "        }",
            "",
        ]

    def test_relationship_lines_skip_structural_and_implied(self, shop: Design) -> None:
        model = model_block(to_structurizr_dsl(shop))
        arrows = [line.strip() for line in model if "->" in line]
        assert arrows == [
            'person_User -> Shop.Web "Browses"',
            'Shop.Web -> Payments.Gateway "Charges cards"',
        ]

    def test_identifiers_sanitized(self) -> None:
        design = Design("T")
        gw = design.system("UserSystem").container("User API Gateway", "HTTP entrypoint")
        gw.tag("gateway")
        dsl = to_structurizr_dsl(design)
        assert 'User_API_Gateway = container "User API Gateway" "HTTP entrypoint" {' in dsl

    def test_colliding_sibling_identifiers_made_distinct(self) -> None:
        design = Design("T")
        system = design.system("S")
        first = system.container("User API")
        second = system.container("User_API")
        first.uses(second, "Forwards")
        dsl = to_structurizr_dsl(design)

        assert 'User_API = container "User API" ""' in dsl
        assert 'User_API_2249899e = container "User_API" ""' in dsl
        assert 'S.User_API -> S.User_API_2249899e "Forwards"' in dsl

    def test_custom_element(self) -> None:
        design = Design("T")
        design.system("S").container("API").custom("Queue", "Jobs", "Work items")
        assert 'Jobs = element "Jobs" "Queue" "Work items"' in to_structurizr_dsl(design)

    def test_quotes_escaped(self) -> None:
        design = Design('The "Shop"', 'Says "hi"')
        design.system("S", 'A "quoted" system').tag('odd"tag')
        dsl = to_structurizr_dsl(design)
        assert dsl.startswith('workspace "The \\"Shop\\"" "Says \\"hi\\"" {')
        assert 'S = softwareSystem "S" "A \\"quoted\\" system" {' in dsl
        assert 'tags "odd\\"tag"' in dsl

    def test_undeclared_endpoint_commented(self) -> None:
        design = Design("T")
        design.system("S").uses("design_Other.Legacy", "Reads")
        dsl = to_structurizr_dsl(design)
        assert "// design_T.S -> design_Other.Legacy: undeclared element" in dsl
        assert not any(line.strip().startswith("S ->") for line in dsl.splitlines())

    def test_interacts_with_rendered(self) -> None:
        design = Design("T")
        design.person("A").interacts_with(design.person("B"), "Talks")
        assert 'person_A -> person_B "Talks"' in to_structurizr_dsl(design)


class TestViews:
    def test_one_pair_per_top_level_system(self, shop: Design) -> None:
        views = [line.strip() for line in views_block(to_structurizr_dsl(shop))]
        heads = [line for line in views if line.endswith("{")]
        assert heads == [
            'systemContext Shop "SystemContext-Shop" {',
            'container Shop "Containers-Shop" {',
            'systemContext Payments "SystemContext-Payments" {',
            'container Payments "Containers-Payments" {',
        ]

    def test_people_get_no_views(self) -> None:
        design = Design("T")
        design.person("User")
        assert views_block(to_structurizr_dsl(design)) == []


class TestRobustness:
    def test_missing_root(self, shop: Design) -> None:
        del shop._nodes[shop.id]
        assert to_structurizr_dsl(shop) == NO_ROOT

    def test_deterministic_and_pure(self, shop: Design) -> None:
        before = (dict(shop.nodes), shop.relationships)
        assert to_structurizr_dsl(shop) == to_structurizr_dsl(shop)
        assert (dict(shop.nodes), shop.relationships) == before

    def test_reference_helper(self, shop: Design) -> None:
        assert reference(shop, "design_Shop.Payments.Gateway.Tokenizer") == (
            "Payments.Gateway.Tokenizer"
        )
        assert reference(shop, shop.id) is None
        assert reference(shop, "nope") is None

    def test_quote(self) -> None:
        assert quote('a"b') == '"a\\"b"'

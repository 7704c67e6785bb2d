"""Tests for template rendering."""

from omni_agent.cpi.template import render, to_template_string


class TestToTemplateString:
    def test_string_is_unchanged(self):
        assert to_template_string('say "hi"') == 'say "hi"'

    def test_numbers(self):
        assert to_template_string(80) == "80"
        assert to_template_string(1.5) == "1.5"

    def test_booleans_use_json_form(self):
        assert to_template_string(True) == "true"
        assert to_template_string(False) == "false"

    def test_none_is_null(self):
        assert to_template_string(None) == "null"

    def test_list_strips_brackets(self):
        assert to_template_string(["80:80", "443:443"]) == '"80:80","443:443"'

    def test_empty_list(self):
        assert to_template_string([]) == ""

    def test_dict_strips_braces(self):
        assert to_template_string({"MODE": "prod", "DEBUG": "0"}) == '"MODE":"prod","DEBUG":"0"'

    def test_only_outermost_delimiters_are_stripped(self):
        assert to_template_string([["a"], {"b": 1}]) == '["a"],{"b":1}'

    def test_non_ascii_is_kept(self):
        assert to_template_string(["café"]) == '"café"'


class TestRender:
    def test_scalar_substitution(self):
        result = render("docker run {image} --name {name}", {"image": "nginx", "name": "web"})
        assert result == "docker run nginx --name web"

    def test_sequence_substitution(self):
        result = render("-p {ports}", {"ports": ["80:80", "443:443"]})
        assert result == '-p "80:80","443:443"'

    def test_missing_placeholder_passes_through(self):
        assert render("echo {missing}", {}) == "echo {missing}"

    def test_unmatched_placeholder_left_beside_matched(self):
        assert render("{name} {other}", {"name": "web"}) == "web {other}"

    def test_every_occurrence_is_replaced(self):
        assert render("{name}-{name}", {"name": "web"}) == "web-web"

    def test_template_without_placeholders(self):
        template = "docker ps -a --format '{{json .}}'"
        assert render(template, {}) == template

    def test_go_template_braces_survive(self):
        result = render("docker inspect --format '{{.Name}}' {name}", {"name": "web"})
        assert result == "docker inspect --format '{{.Name}}' web"

    def test_deterministic(self):
        params = {"image": "nginx", "ports": ["80:80"], "env": {"A": "1"}}
        template = "docker run {ports} {env} {image}"
        assert render(template, params) == render(template, params)

    def test_params_are_not_modified(self):
        params = {"ports": ["80:80"]}
        render("{ports}", params)
        assert params == {"ports": ["80:80"]}

    def test_substituted_values_are_not_rendered_again(self):
        params = {"name": "{ports}", "ports": ["80:80"]}
        assert render("{name} {ports}", params) == '{ports} "80:80"'

    def test_value_naming_a_missing_key_stays_literal(self):
        assert render("echo {name}", {"name": "{image}"}) == "echo {image}"

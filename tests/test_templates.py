import pytest

from folio.templates import TemplateLoader, TemplateNotFoundError, render_template


def test_render_replaces_single_placeholder():
    result = render_template("<h1>{{title}}</h1>", {"title": "Hello World"})
    assert result == "<h1>Hello World</h1>"


def test_render_replaces_multiple_placeholders():
    template = "<h1>{{title}}</h1><p>{{description}}</p>"
    result = render_template(template, {"title": "Hello", "description": "World"})
    assert result == "<h1>Hello</h1><p>World</p>"


def test_render_leaves_unknown_placeholders():
    template = "<h1>{{title}}</h1><p>{{missing}}</p>"
    assert render_template(template, {"title": "Hello"}) == "<h1>Hello</h1><p>{{missing}}</p>"
    assert render_template("{{a}}{{b_2}}", {}) == "{{a}}{{b_2}}"


def test_render_static_template_and_empty_value():
    assert render_template("<h1>Static Content</h1>", {"title": "x"}) == "<h1>Static Content</h1>"
    assert render_template("<h1>{{title}}</h1>", {"title": ""}) == "<h1></h1>"


def test_render_repeated_placeholder_and_no_rescan():
    template = "{{name}} and {{name}}"
    assert render_template(template, {"name": "Ada"}) == "Ada and Ada"
    # substituted values are not processed again
    result = render_template("<p>{{body}}</p>", {"body": "{{title}}", "title": "nope"})
    assert result == "<p>{{title}}</p>"


def test_render_ignores_malformed_placeholders():
    template = "{{ title }} {{title-case}} {title} {{}} {{ti"
    assert render_template(template, {"title": "x", "title-case": "y"}) == template


def test_render_values_are_not_escaped():
    result = render_template("<div>{{content}}</div>", {"content": "<p>a & b</p>"})
    assert result == "<div><p>a & b</p></div>"


def test_loader_reads_and_renders(tmp_path):
    (tmp_path / "home.html").write_text("<ul>{{posts}}</ul>", encoding="utf-8")
    loader = TemplateLoader(tmp_path)
    assert loader.read("home") == "<ul>{{posts}}</ul>"
    assert loader.render("home", {"posts": "<li>1</li>"}) == "<ul><li>1</li></ul>"


def test_loader_missing_template(tmp_path):
    loader = TemplateLoader(tmp_path)
    with pytest.raises(TemplateNotFoundError) as excinfo:
        loader.read("base")
    assert excinfo.value.name == "base"
    assert excinfo.value.path == tmp_path / "base.html"
    assert isinstance(excinfo.value, FileNotFoundError)

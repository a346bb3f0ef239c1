from jinja2 import Environment, Template, select_autoescape

environment = Environment(autoescape=select_autoescape(default=True, default_for_string=True))

DEFAULT_CHAPTER_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <meta http-equiv="X-UA-Compatible" content="ie=edge">
    <title>Choose Your Own Adventure</title>
  </head>
  <body>
    <section class="page">
      <h1>{{ chapter.title }}</h1>
      {% for paragraph in chapter.paragraphs %}
      <p>{{ paragraph }}</p>
      {% endfor %}
      <ul>
        {% for option in chapter.options %}
        <li>
          <a href="/{{ option.chapter | urlencode }}">{{ option.text }}</a>
        </li>
        {% endfor %}
      </ul>
    </section>
    <style>
      body {
        font-family: helvetica, arial;
      }
      h1 {
        text-align: center;
        position: relative;
      }
      .page {
        width: 80%;
        max-width: 500px;
        margin: 40px auto;
        padding: 80px;
        background-color: #fffcf6;
        border: 1px solid #eee;
        box-shadow: 0 10px 6px -6px #777;
      }
      ul {
        border-top: 1px dotted #ccc;
        padding: 10px 0 0 0;
        -webkit-padding-start: 0;
      }
      li {
        padding-top: 10px;
      }
      a,
      a:visited {
        text-decoration: none;
        color: #6295b5;
      }
      a:active,
      a:hover {
        color: #7792a2;
      }
      p {
        text-indent: 1em;
      }
    </style>
  </body>
</html>
"""

default_template = environment.from_string(DEFAULT_CHAPTER_TEMPLATE)


def compile_template(source: str) -> Template:
    """Compile chapter template source with HTML autoescaping."""
    return environment.from_string(source)


def load_template(file_path: str) -> Template:
    """
    Read a Jinja2 chapter template from disk.
    The template is rendered with the current `chapter` (and its `key`) in the context.
    """
    with open(file_path, "r", encoding="utf-8") as file:
        return compile_template(file.read())

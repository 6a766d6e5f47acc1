"""Full HTML page shell around a rendered body (used by the pattern preview)."""
from html import escape


def render_page(title: str, body: str, extra_head: str = "", extra_body_end: str = "",
                lang: str = "en") -> str:
    """Complete HTML document; `extra_head` / `extra_body_end` are injected verbatim."""
    return f"""<!DOCTYPE html>
<html lang="{escape(lang)}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(title)}</title>
  {extra_head}
</head>
<body>
<main class="entry-content">
{body}
</main>
{extra_body_end}
</body>
</html>"""

"""
Block markup tests — parser, presence scanner, renderer.
"""
from editor_plus.blocks import ParsedBlock, parse_blocks, render_block, render_blocks, scan

TWO_BLOCKS = (
    '<!-- wp:paragraph --><p>One</p><!-- /wp:paragraph -->\n\n'
    '<!-- wp:heading {"level":2} --><h2>Two</h2><!-- /wp:heading -->'
)

NESTED = (
    '<!-- wp:columns --><div class="wp-block-columns">'
    '<!-- wp:column --><div class="wp-block-column">'
    '<!-- wp:paragraph --><p>x</p><!-- /wp:paragraph -->'
    '</div><!-- /wp:column -->'
    '</div><!-- /wp:columns -->'
)


# ── Parser ────────────────────────────────────────────────────────────────

class TestParser:
    def test_top_level_blocks(self):
        blocks = parse_blocks(TWO_BLOCKS)
        assert [b.name for b in blocks] == ["core/paragraph", "core/heading"]
        assert blocks[1].attrs == {"level": 2}
        assert blocks[0].inner_html == "<p>One</p>"

    def test_nested(self):
        (columns,) = parse_blocks(NESTED)
        assert columns.name == "core/columns"
        (column,) = columns.inner_blocks
        assert column.inner_blocks[0].name == "core/paragraph"
        assert columns.inner_content == ['<div class="wp-block-columns">', None, "</div>"]

    def test_void_block(self):
        (spacer,) = parse_blocks('<!-- wp:spacer {"height":"40px"} /-->')
        assert spacer.name == "core/spacer"
        assert spacer.attrs == {"height": "40px"}
        assert spacer.inner_blocks == []

    def test_namespaced_name_kept(self):
        (block,) = parse_blocks("<!-- wp:acme/card --><div>c</div><!-- /wp:acme/card -->")
        assert block.name == "acme/card"

    def test_nested_json_attrs(self):
        (block,) = parse_blocks('<!-- wp:group {"layout":{"type":"flex"}} --><div></div><!-- /wp:group -->')
        assert block.attrs == {"layout": {"type": "flex"}}

    def test_freeform_html(self):
        blocks = parse_blocks("hello <!-- wp:paragraph --><p>a</p><!-- /wp:paragraph --> bye")
        assert [b.name for b in blocks] == [None, "core/paragraph", None]
        assert blocks[0].inner_html == "hello "

    def test_unclosed_block_keeps_tail(self):
        (block,) = parse_blocks("<!-- wp:group --><div>open")
        assert block.name == "core/group"
        assert block.inner_html == "<div>open"

    def test_empty(self):
        assert parse_blocks("") == []
        assert parse_blocks(None) == []


# ── Scanner ───────────────────────────────────────────────────────────────

class TestScanner:
    def test_nested_dict_tree(self):
        tree = [{"name": "core/columns", "children": [
            {"name": "core/column", "children": [{"name": "core/paragraph"}]},
        ]}]
        assert scan(tree) == {"core/columns", "core/column", "core/paragraph"}

    def test_parsed_tree(self):
        assert scan(parse_blocks(NESTED)) == {"core/columns", "core/column", "core/paragraph"}

    def test_duplicates_collapse(self):
        tree = [{"name": "core/paragraph"}] * 100
        assert scan(tree) == {"core/paragraph"}

    def test_unnamed_nodes_skipped(self):
        tree = [{"name": None, "children": [{"blockName": "core/image"}]}, {"name": ""}]
        assert scan(tree) == {"core/image"}

    def test_freeform_has_no_name(self):
        assert scan(parse_blocks("just text")) == set()

    def test_accumulates_into_given_set(self):
        found = {"core/heading"}
        scan([{"name": "core/image"}], found)
        assert found == {"core/heading", "core/image"}

    def test_single_node(self):
        assert scan(ParsedBlock(name="core/quote")) == {"core/quote"}


# ── Renderer ──────────────────────────────────────────────────────────────

class TestRender:
    def test_concatenates_in_order(self):
        assert render_blocks(parse_blocks(TWO_BLOCKS)) == "<p>One</p><h2>Two</h2>"

    def test_nested_in_place(self):
        html = render_blocks(parse_blocks(NESTED))
        assert html == '<div class="wp-block-columns"><div class="wp-block-column"><p>x</p></div></div>'

    def test_void_renders_empty(self):
        assert render_blocks(parse_blocks("<!-- wp:spacer /-->")) == ""

    def test_block_filter_sees_every_block(self):
        seen = []

        def _filter(html, block):
            seen.append(block.name)
            return html.upper()

        html = render_block(parse_blocks(NESTED)[0], _filter)
        assert seen == ["core/paragraph", "core/column", "core/columns"]
        assert html == '<DIV CLASS="WP-BLOCK-COLUMNS"><DIV CLASS="WP-BLOCK-COLUMN"><P>X</P></DIV></DIV>'

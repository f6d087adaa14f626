"""Tests for splitting stories into text and media."""

from story_enhance.enums import BlockKind, MediaType
from story_enhance.services.content import ContentBlock, RichContent, extract


class TestExtract:
    """Tests for extract."""

    def test_round_trip_scenario(self):
        html = '<p>Intro</p><img src="a.jpg"><p>Middle</p><img src="b.jpg"><p>End</p>'

        result = extract(html)

        assert result.text_only == "Intro\n\nMiddle\n\nEnd"
        assert [m.position for m in result.media] == [1, 2]
        assert 'src="a.jpg"' in result.media[0].html
        assert 'src="b.jpg"' in result.media[1].html
        assert result.text_block_count == 3

    def test_media_types(self):
        html = (
            "<p>Intro</p>"
            '<img src="a.jpg">'
            '<div class="video-embed"><iframe src="https://www.youtube.com/embed/x"></iframe></div>'
        )

        result = extract(html)

        assert [m.type for m in result.media] == [MediaType.IMAGE, MediaType.VIDEO]

    def test_leading_media_has_position_zero(self):
        result = extract('<img src="a.jpg"><img src="b.jpg"><p>Text</p>')

        assert [m.position for m in result.media] == [0, 0]

    def test_trailing_media_position_equals_text_count(self):
        result = extract('<p>One</p><p>Two</p><img src="a.jpg">')

        assert result.media[0].position == 2

    def test_captions_do_not_leak_into_text(self, story_html):
        result = extract(story_html)

        assert "Photo:" not in result.text_only
        assert "Jane Penrose" not in result.text_only
        assert len(result.media) == 1

    def test_caption_does_not_count_as_text_block(self):
        html = '<p>One</p><img src="a.jpg"><p><em>Photo: Jane</em></p><img src="b.jpg"><p>Two</p>'

        result = extract(html)

        assert [m.position for m in result.media] == [1, 1]

    def test_captioned_image_paragraph_keeps_image(self):
        html = '<p>Intro text here.</p><p><img src="quay.jpg"><em>Photo: Jane Penrose</em></p><p>End.</p>'

        result = extract(html)

        assert result.text_only == "Intro text here.\n\nEnd."
        assert len(result.media) == 1
        assert result.media[0].type == MediaType.IMAGE
        assert 'src="quay.jpg"' in result.media[0].html
        assert result.media[0].position == 1

    def test_emphasised_marker_inside_prose_is_kept(self):
        html = "<p>Gran used to say <em>Photo: hold still now</em> before every snap, and we all froze.</p>"

        result = extract(html)

        assert result.text_only == (
            "Gran used to say Photo: hold still now before every snap, and we all froze."
        )
        assert result.text_block_count == 1

    def test_no_markup_in_text(self, story_html):
        result = extract(story_html)

        assert "<" not in result.text_only
        assert "harbour.jpg" not in result.text_only

    def test_headings_and_lists_are_text(self):
        html = "<h2>Recipe</h2><ul><li>Flour</li><li>Lard</li></ul><p>Mix well.</p>"

        result = extract(html)

        assert result.text_only == "Recipe\n\nFlour\nLard\n\nMix well."
        assert result.paragraphs == ["Recipe", "Flour\nLard", "Mix well."]

    def test_unknown_blocks_dropped(self):
        html = "<p>One</p><hr><table><tr><td>x</td></tr></table><p>Two</p>"

        result = extract(html)

        assert result.text_only == "One\n\nTwo"
        assert result.media == []

    def test_accepts_parsed_content(self):
        content = RichContent(
            blocks=[
                ContentBlock(kind=BlockKind.TEXT_PARAGRAPH, raw_markup="<p>A</p>", text_content="A"),
                ContentBlock(kind=BlockKind.UNKNOWN, raw_markup="<hr/>"),
                ContentBlock(kind=BlockKind.IMAGE, raw_markup='<img src="x.jpg"/>'),
            ]
        )

        result = extract(content)

        assert result.text_only == "A"
        assert result.media[0].html == '<img src="x.jpg"/>'
        assert result.media[0].position == 1

    def test_text_block_without_text_is_dropped(self):
        content = RichContent(
            blocks=[
                ContentBlock(kind=BlockKind.TEXT_PARAGRAPH, raw_markup="<p></p>", text_content=""),
                ContentBlock(kind=BlockKind.IMAGE, raw_markup='<img src="x.jpg"/>'),
            ]
        )

        result = extract(content)

        assert result.text_only == ""
        assert result.media[0].position == 0

    def test_empty_document(self):
        result = extract("")

        assert result.text_only == ""
        assert result.media == []
        assert result.paragraphs == []

    def test_does_not_modify_input(self, story_html):
        content_copy = str(story_html)

        extract(story_html)

        assert story_html == content_copy

"""Tests for swivl_sniffs.sniffs.doctrine.extractor — annotation collection per property."""

from __future__ import annotations

from swivl_sniffs.sniffs.doctrine.extractor import extract_annotations
from swivl_sniffs.sniffs.doctrine.schema import AnnotationKind
from swivl_sniffs.source.model import AttributeBlock, DocComment, PropertyDeclaration, Token

SNIFF_CODE = "Swivl.Commenting.DoctrineEntity"


def _property(
    doc: str | None = None,
    attributes: tuple[AttributeBlock, ...] = (),
) -> PropertyDeclaration:
    comment = None
    if doc is not None:
        comment = DocComment(doc, Token("doc_comment", doc.split("\n")[0], 10, 5))
    return PropertyDeclaration(
        name="title",
        token=Token("variable", "$title", 20, 13),
        class_name="Post",
        doc_comment=comment,
        attributes=attributes,
    )


def _attribute(name: str, arguments: str | None, line: int = 15) -> AttributeBlock:
    return AttributeBlock(name, arguments, Token("attribute", name, line, 7))


class TestDocCommentTags:
    def test_orm_tags_only(self) -> None:
        doc = '/**\n     * @var string\n     * @ORM\\Column(type="string", length=64)\n     * @Assert\\NotBlank\n     */'
        extraction = extract_annotations(_property(doc), SNIFF_CODE)
        assert extraction.names == ["ORM\\Column"]
        tag = extraction.tags[0]
        assert tag.kind is AnnotationKind.COLUMN
        assert tag.short_name == "Column"
        assert tag.attributes == {"type": "string", "length": 64}
        assert extraction.var_type == "string"

    def test_tag_token_points_at_tag(self) -> None:
        doc = '/**\n     * @ORM\\Id\n     * @ORM\\Column(type="integer")\n     */'
        extraction = extract_annotations(_property(doc), SNIFF_CODE)
        column = extraction.tags[1]
        assert (column.token.line, column.token.column) == (12, 8)
        assert column.token.content.startswith("@ORM\\Column")

    def test_join_table_is_skipped(self) -> None:
        doc = (
            "/**\n"
            '     * @ORM\\ManyToMany(targetEntity="App\\Tag")\n'
            '     * @ORM\\JoinTable(name="post_tags", joinColumns={@ORM\\JoinColumn(name="post_id")})\n'
            "     */"
        )
        extraction = extract_annotations(_property(doc), SNIFF_CODE)
        assert extraction.names == ["ORM\\ManyToMany"]

    def test_unknown_orm_annotation_has_no_kind(self) -> None:
        extraction = extract_annotations(_property("/** @ORM\\Version */"), SNIFF_CODE)
        assert extraction.names == ["ORM\\Version"]
        assert extraction.tags[0].kind is None

    def test_ignore_directive(self) -> None:
        doc = (
            "/**\n"
            "     * @codingStandardsIgnoreError Swivl.Commenting.DoctrineEntity.ColumnUnderscored\n"
            '     * @ORM\\Column(name="TITLE", type="string")\n'
            "     */"
        )
        extraction = extract_annotations(_property(doc), SNIFF_CODE)
        assert extraction.ignored_codes == ["ColumnUnderscored"]

    def test_parse_issues_carry_tag_token(self) -> None:
        doc = '/**\n     * @ORM\\Column(type= "string")\n     */'
        extraction = extract_annotations(_property(doc), SNIFF_CODE)
        [(finding, token)] = extraction.issues
        assert finding.code == "ExtraSpace"
        assert token.line == 11

    def test_no_comment(self) -> None:
        extraction = extract_annotations(_property(), SNIFF_CODE)
        assert extraction.tags == []
        assert extraction.var_type is None


class TestNativeAttributes:
    def test_attributes_follow_comment_tags(self) -> None:
        prop = _property(
            "/** @ORM\\Id */",
            (
                _attribute("ORM\\Column", "type: 'integer'"),
                _attribute("Assert\\Positive", None),
                _attribute("ORM\\GeneratedValue", None, line=16),
            ),
        )
        extraction = extract_annotations(prop, SNIFF_CODE)
        assert extraction.names == ["ORM\\Id", "ORM\\Column", "ORM\\GeneratedValue"]
        assert extraction.tags[1].attributes == {"type": "integer"}
        assert extraction.tags[2].attributes == {}
        assert extraction.tags[2].token.line == 16

    def test_native_join_table_is_skipped(self) -> None:
        prop = _property(attributes=(_attribute("ORM\\JoinTable", "name: 'post_tags'"),))
        assert extract_annotations(prop, SNIFF_CODE).tags == []

    def test_attributes_of_and_has(self) -> None:
        prop = _property(
            attributes=(
                _attribute("ORM\\ManyToOne", "targetEntity: User::class"),
                _attribute("ORM\\JoinColumn", "nullable: false"),
            )
        )
        extraction = extract_annotations(prop, SNIFF_CODE)
        assert extraction.has("JoinColumn")
        assert not extraction.has("Column")
        assert extraction.attributes_of("JoinColumn") == {"nullable": False}
        assert extraction.attributes_of("Column") == {}

"""Tests for the identifier renamer."""

from pgtypegen.core.renamer import rename_identifiers

PATTERN = "InPublicSchema"
SUFFIX = "PublicS"


class TestRenameIdentifiers:
    """Test rename_identifiers."""

    def test_renames_identifier_tail(self):
        result = rename_identifiers("const FooInPublicSchema = 1;\n", PATTERN, SUFFIX)
        assert result == "const FooPublicS = 1;\n"

    def test_fragment_starting_with_digit_is_left_alone(self):
        text = "const 9InPublicSchema = 1;\n"
        assert rename_identifiers(text, PATTERN, SUFFIX) == text

    def test_fragment_with_inner_digit_is_renamed(self):
        result = rename_identifiers("const Foo9InPublicSchema = 1;\n", PATTERN, SUFFIX)
        assert result == "const Foo9PublicS = 1;\n"

    def test_whole_fragment_must_be_identifier(self):
        """A fragment like 123abc fails even though abc alone would pass."""
        text = "x = 123abcInPublicSchema;\n"
        assert rename_identifiers(text, PATTERN, SUFFIX) == text

    def test_pattern_without_prefix_is_left_alone(self):
        text = 'const label = "InPublicSchema";\n'
        assert rename_identifiers(text, PATTERN, SUFFIX) == text

    def test_multiple_occurrences_on_one_line(self):
        text = "status: statusInPublicSchema().references(() => usersInPublicSchema.id),"
        result = rename_identifiers(text, PATTERN, SUFFIX)
        assert result == "status: statusPublicS().references(() => usersPublicS.id),\n"

    def test_later_occurrence_after_skipped_one(self):
        text = "9InPublicSchema fooInPublicSchema"
        assert rename_identifiers(text, PATTERN, SUFFIX) == "9InPublicSchema fooPublicS\n"

    def test_adjacent_patterns_use_full_fragment(self):
        """The second fragment is aInPublicSchema, a valid identifier."""
        result = rename_identifiers("aInPublicSchemaInPublicSchema", PATTERN, SUFFIX)
        assert result == "aPublicSPublicS\n"

    def test_skipped_occurrence_taints_following_one(self):
        """Both fragments start with a digit, so nothing is renamed."""
        text = "x = 9InPublicSchemaInPublicSchema;"
        assert rename_identifiers(text, PATTERN, SUFFIX) == text + "\n"

    def test_identifier_continuing_after_rename(self):
        result = rename_identifiers("fooInPublicSchemaBarInPublicSchema", PATTERN, SUFFIX)
        assert result == "fooPublicSBarPublicS\n"

    def test_underscore_identifier(self):
        assert rename_identifiers("_InPublicSchema", PATTERN, SUFFIX) == "_PublicS\n"

    def test_blank_lines_and_line_count_preserved(self):
        text = "a\n\nexport const fooInPublicSchema = 1;\n\nb\n"
        result = rename_identifiers(text, PATTERN, SUFFIX)

        assert result == "a\n\nexport const fooPublicS = 1;\n\nb\n"
        assert result.count("\n") == text.count("\n")

    def test_missing_final_newline_is_added(self):
        result = rename_identifiers("fooInPublicSchema", PATTERN, SUFFIX)
        assert result == "fooPublicS\n"

    def test_text_without_pattern_is_unchanged(self):
        text = "export const users = pgTable('users', {});"
        assert rename_identifiers(text, PATTERN, SUFFIX) == text

    def test_idempotent(self, billing_raw_text: str):
        once = rename_identifiers(billing_raw_text, "InBillingSchema", "BillingS")
        twice = rename_identifiers(once, "InBillingSchema", "BillingS")

        assert "InBillingSchema" not in once
        assert twice == once

    def test_billing_fixture(self, billing_raw_text: str):
        result = rename_identifiers(billing_raw_text, "InBillingSchema", "BillingS")

        assert "export const invoicesBillingS = billingSchema.table(" in result
        assert "status: invoiceStatusBillingS().default('draft')" in result
        assert "references(() => invoicesBillingS.id)" in result
        assert 'export const billingSchema = pgSchema("billing");' in result

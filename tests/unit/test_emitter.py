"""Tests for the TypeScript emitter."""

from datetime import datetime

import pytest

from pgtypegen.core.emitter import TypeScriptEmitter
from pgtypegen.core.extractor import extract_enums, scan_declarations
from pgtypegen.core.models import DeclarationScan, EnumRecord, GenerationMode, TableRecord
from pgtypegen.core.naming import SchemaNames
from pgtypegen.core.renamer import rename_identifiers


class TestTypeScriptEmitter:
    """Test the TypeScriptEmitter class."""

    @pytest.fixture
    def emitter(self, public_names: SchemaNames, fixed_time: datetime) -> TypeScriptEmitter:
        return TypeScriptEmitter(public_names, generated_at=fixed_time)

    @pytest.fixture
    def status_enum(self) -> EnumRecord:
        return EnumRecord(variable_name="status", enum_name="status", values=("active", "inactive"))

    @pytest.fixture
    def sample_scan(self) -> DeclarationScan:
        return DeclarationScan(
            tables=[TableRecord(variable_name="users"), TableRecord(variable_name="order_items")],
            enums=["status"],
        )

    # === Headers ===

    def test_timestamp_format(self, emitter: TypeScriptEmitter):
        assert emitter.timestamp == "2024-05-01T12:30:00.000Z"

    def test_mode_labels(self, public_names: SchemaNames, status_enum: EnumRecord):
        full = TypeScriptEmitter(public_names).render_enums([status_enum])
        types_only = TypeScriptEmitter(public_names, mode=GenerationMode.TYPES_ONLY).render_enums(
            [status_enum]
        )

        assert " * Mode: Full schema pull + type generation" in full
        assert " * Mode: Types only (manual regeneration)" in types_only

    # === enums.ts ===

    def test_render_enum_definition(self, emitter: TypeScriptEmitter, status_enum: EnumRecord):
        content = emitter.render_enums([status_enum])

        assert "Auto-generated TypeScript enums for the public schema." in content
        assert "Generated at: 2024-05-01T12:30:00.000Z" in content
        assert "import { getArrayFromEnum } from '../../utils';" in content
        assert "Defines the `status` enum type for entities in the `public`." in content
        assert (
            "export enum StatusPublicS {\n"
            '  "active" = "active",\n'
            '  "inactive" = "inactive",\n'
            "}\n"
        ) in content
        assert (
            'export const StatusPublicSEnums = [\n  "active",\n  "inactive",\n] as const;\n'
        ) in content
        assert (
            "export type StatusPublicSType = (typeof StatusPublicSEnums)[number];\n" in content
        )

    def test_enum_member_count(self, emitter: TypeScriptEmitter, status_enum: EnumRecord):
        content = emitter.render_enums([status_enum])
        enum_body = content.split("export enum StatusPublicS {\n")[1].split("}")[0]

        assert enum_body.count(" = ") == 2

    def test_enum_uses_database_enum_name(self, emitter: TypeScriptEmitter):
        record = EnumRecord(variable_name="orderState", enum_name="ORDER_STATE", values=("new",))
        content = emitter.render_enums([record])

        assert "export enum OrderStatePublicS {" in content
        assert "Defines the `orderState` enum type" in content

    def test_custom_utils_import(self, public_names: SchemaNames, status_enum: EnumRecord):
        emitter = TypeScriptEmitter(public_names, utils_import="@/db/utils")
        assert "from '@/db/utils';" in emitter.render_enums([status_enum])

    # === types.ts ===

    def test_render_table_types(self, emitter: TypeScriptEmitter, sample_scan: DeclarationScan):
        content = emitter.render_types(sample_scan, "", enums_generated=True)

        assert "export type Users = TableSelect<typeof schema.users>;" in content
        assert "export type UsersInsert = TableInsert<typeof schema.users>;" in content
        assert "export type OrderItems = TableSelect<typeof schema.order_items>;" in content
        assert "export type OrderItemsInsert = TableInsert<typeof schema.order_items>;" in content
        assert "export type StatusType = typeof schema.status.enumValues[number];" in content

    def test_types_header(self, emitter: TypeScriptEmitter, sample_scan: DeclarationScan):
        content = emitter.render_types(sample_scan, "", enums_generated=False)

        assert "using gen-types-enums-psql-schema." in content
        assert " * Schema: public\n" in content
        assert "import { type TableInsert, type TableSelect } from '../../utils';" in content
        assert "import type * as schema from './schema';" in content
        assert "export * from './schema';" in content
        assert "export * from './enums';" not in content

    def test_types_reexport_enums_when_generated(
        self, emitter: TypeScriptEmitter, sample_scan: DeclarationScan
    ):
        content = emitter.render_types(sample_scan, "", enums_generated=True)
        assert "export * from './schema';\n\nexport * from './enums';\n" in content

    def test_custom_form_references(self, billing_raw_text: str, fixed_time: datetime):
        names = SchemaNames.for_schema("billing")
        text = rename_identifiers(billing_raw_text, names.search_pattern, names.suffix)
        emitter = TypeScriptEmitter(names, generated_at=fixed_time)

        content = emitter.render_types(scan_declarations(text, names), text, True)

        assert "export type Invoices = TableSelect<typeof schema.invoicesBillingS>;" in content
        assert "export type PaymentsInsert = TableInsert<typeof schema.paymentsBillingS>;" in content
        assert (
            "export type InvoiceStatusType = typeof schema.invoiceStatusBillingS.enumValues[number];"
            in content
        )

    def test_membership_checks(self, emitter: TypeScriptEmitter):
        text = "export const usersPublicS = publicSchema.table('users', {})"

        assert emitter.uses_custom_table("users", text)
        assert not emitter.uses_custom_table("posts", text)
        assert not emitter.uses_custom_enum("users", text)

    # === index.ts ===

    def test_index_with_enums(self, emitter: TypeScriptEmitter):
        content = emitter.render_index(enums_generated=True)

        assert content.endswith(
            "export * from './types';\nexport * from './schema';\nexport * from './enums';\n"
        )
        assert "for the public schema." in content

    def test_index_without_enums(self, emitter: TypeScriptEmitter):
        content = emitter.render_index(enums_generated=False)

        assert content.endswith("export * from './types';\nexport * from './schema';\n")
        assert "./enums" not in content

    # === End to end ===

    def test_public_fixture_end_to_end(
        self, emitter: TypeScriptEmitter, public_schema_text: str, public_names: SchemaNames
    ):
        records = extract_enums(public_schema_text, public_names)
        scan = scan_declarations(public_schema_text, public_names)

        enums = emitter.render_enums(records)
        types = emitter.render_types(scan, public_schema_text, enums_generated=bool(records))
        index = emitter.render_index(enums_generated=bool(records))

        assert "export enum StatusPublicS {" in enums
        assert "export enum RolePublicS {" in enums
        assert "export type Users = TableSelect<typeof schema.users>;" in types
        assert "export type OrderItemsInsert = TableInsert<typeof schema.order_items>;" in types
        assert "export type RoleType = typeof schema.role.enumValues[number];" in types
        assert "export * from './enums';" in index

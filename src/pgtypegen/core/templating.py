"""
Starter templates and config-file templating.

The database config template contains the ``random_schema_name``
placeholder, replaced by the schema name for each per-schema config.
"""

from __future__ import annotations

SCHEMA_PLACEHOLDER = "random_schema_name"

DB_CONFIG_TEMPLATE = """\
import { defineConfig } from 'drizzle-kit';

export default defineConfig({
  dialect: 'postgresql',
  dbCredentials: {
    url: process.env.DATABASE_URL!
  },
  schema: './schemas/random_schema_name/migrations/schema.ts',
  out: './schemas/random_schema_name/migrations',
  schemaFilter: ['random_schema_name'],
  introspect: {
    casing: 'camel'
  }
});
"""

UTILS_TEMPLATE = """\
/**
 * Converts an enum to a PostgreSQL enum.
 * @template T - The enum type.
 * @param {T} myEnum - The enum to convert.
 * @returns {[T[keyof T], ...T[keyof T][]]} An array containing the enum values as strings.
 */
export function enumToPgEnum<T extends Record<string, unknown>>(
  myEnum: T
): [T[keyof T], ...T[keyof T][]] {
  return Object.values(myEnum).map((value: unknown) => `${value}`) as [
    T[keyof T],
    ...T[keyof T][]
  ];
}

/**
 * Helper function for enum values with strict typing
 * @template T - The enum type.
 * @param {T} enumType - The enum to get the values of.
 * @returns {T['enumValues'][number][]} An array containing the enum values as strings.
 */
export const getEnumValues = <T extends { enumValues: readonly string[] }>(
  enumType: T
): T['enumValues'][number][] =>
  Array.from(enumType.enumValues) as T['enumValues'][number][];

/**
 * Get the values of an enum as an array.
 * @param enumType - The enum to get the values of.
 * @returns {T[]} An array containing the enum values.
 */
export const getArrayFromEnum = <T extends Record<string, unknown>>(
  enumType: T
) => {
  return Object.values(enumType) as T[keyof T][];
};

export type TableInsert<T> = T extends { $inferInsert: infer U } ? U : never;

export type TableSelect<T> = T extends { $inferSelect: infer U } ? U : never;
"""


def render_config_template(template_text: str, schema: str) -> str:
    """Replace every schema placeholder in ``template_text`` with ``schema``."""
    return template_text.replace(SCHEMA_PLACEHOLDER, schema)

"""Supabase repository for delivery extensions."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from dairy_ledger.domain.catalog import Extension
from dairy_ledger.services.catalog import ExtensionRepository


@dataclass
class SupabaseExtensionRepository(ExtensionRepository):
    """Supabase implementation for extensions."""

    client: Client

    def list_extensions(self) -> list[Extension]:
        """Return all extensions ordered by name."""
        response = (
            self.client.table("extensions")
            .select("id, name")
            .order("name", desc=False)
            .execute()
        )
        return [_parse_extension(row) for row in response.data or []]

    def get_extension(self, extension_id: UUID) -> Extension | None:
        """Return an extension by id."""
        response = (
            self.client.table("extensions")
            .select("id, name")
            .eq("id", str(extension_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_extension(response.data[0])

    def create_extension(self, name: str) -> Extension:
        """Create an extension row and return it."""
        response = self.client.table("extensions").insert({"name": name}).execute()
        if not response.data:
            raise RuntimeError("Failed to create extension")
        return _parse_extension(response.data[0])

    def rename_extension(self, extension_id: UUID, name: str) -> Extension | None:
        """Rename an extension."""
        response = (
            self.client.table("extensions")
            .update({"name": name})
            .eq("id", str(extension_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_extension(response.data[0])

    def delete_extension(self, extension_id: UUID) -> bool:
        """Delete an extension."""
        response = (
            self.client.table("extensions")
            .delete()
            .eq("id", str(extension_id))
            .execute()
        )
        return bool(response.data)


def _parse_extension(row: dict[str, object]) -> Extension:
    return Extension(id=UUID(str(row["id"])), name=str(row.get("name", "")))

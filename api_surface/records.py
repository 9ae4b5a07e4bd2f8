"""API record model emitted for every exported symbol."""

from pydantic import BaseModel, ConfigDict, field_serializer

from api_surface.tags import DocumentationTagEntry


class APIRecord(BaseModel):
    """Public description of one exported symbol.

    @public

    Attributes:
        module: Entry-point module the symbol is exported from.
        api: Exported symbol name.
        kind: Declaration kind of the first bound declaration.
        signatures: One synthesized signature per bound declaration.
        information: Documentation tags of the first declaration, serialized
            as ``[tag, *lines]`` lists.
    """

    model_config = ConfigDict(frozen=True)

    module: str
    api: str
    kind: str
    signatures: tuple[str, ...]
    information: tuple[DocumentationTagEntry, ...] = ()

    @field_serializer("information")
    def serialize_information(self, information: tuple[DocumentationTagEntry, ...]) -> list[list[str]]:
        return [entry.as_list() for entry in information]

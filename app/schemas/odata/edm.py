"""
Entity data model for the OData service root.

The CSDL document below is served verbatim from $metadata. The field
list is shared with the flattener so the schema and the records it
describes never drift apart.
"""

SCHEMA_NAMESPACE = "XeokitBIM"
ENTITY_TYPE = "Element"
ENTITY_SET = "Elements"

# (name, nullable) in record key order
ELEMENT_PROPERTIES: tuple[tuple[str, bool], ...] = (
    ("id", False),
    ("projectId", False),
    ("modelId", True),
    ("name", True),
    ("type", True),
    ("parent", True),
    ("attributes", True),
)

ELEMENT_FIELDS: tuple[str, ...] = tuple(name for name, _ in ELEMENT_PROPERTIES)


def _property_lines() -> str:
    return "\n".join(
        f'        <Property Name="{name}" Type="Edm.String" '
        f'Nullable="{"true" if nullable else "false"}"/>'
        for name, nullable in ELEMENT_PROPERTIES
    )


METADATA_DOCUMENT = f"""<?xml version="1.0" encoding="UTF-8"?>
<edmx:Edmx xmlns:edmx="http://docs.oasis-open.org/odata/ns/edmx" Version="4.0">
  <edmx:DataServices>
    <Schema xmlns="http://docs.oasis-open.org/odata/ns/edm" Namespace="{SCHEMA_NAMESPACE}">
      <EntityType Name="{ENTITY_TYPE}">
        <Key>
          <PropertyRef Name="id"/>
        </Key>
{_property_lines()}
      </EntityType>
      <EntityContainer Name="Container">
        <EntitySet Name="{ENTITY_SET}" EntityType="{SCHEMA_NAMESPACE}.{ENTITY_TYPE}"/>
      </EntityContainer>
    </Schema>
  </edmx:DataServices>
</edmx:Edmx>"""

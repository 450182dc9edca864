import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..config import settings
from ..scanner import find_schema_file, read_text, relative_posix
from ..types import Cardinality, RelationshipRecord, SchemaData, SchemaEntity, SchemaField
from ..utils.logger import app_logger


class SchemaParser:
    """Parses entity blocks of a schema definition file.

    Parsing is done in two passes. The first collects every declared entity name,
    the second parses field lines. A field type can therefore refer to an entity
    declared further down the file.
    """

    def __init__(self, entity_keywords: Optional[Sequence[str]] = None):
        if entity_keywords is None:
            entity_keywords = settings.schema_entity_keywords_list
        keywords = '|'.join(re.escape(k) for k in entity_keywords)

        self.name_pattern = re.compile(rf"(?:^|(?<=[}};]))[ \t]*(?:{keywords})\s+(\w+)\s*\{{", re.MULTILINE)
        self.block_pattern = re.compile(rf"(?:^|(?<=[}};]))[ \t]*(?:{keywords})\s+(\w+)\s*\{{([^}}]*)\}}", re.MULTILINE)

    def collect_entity_names(self, text: str) -> List[str]:
        """Pass 1: names of all declared entities, in declaration order."""
        names: List[str] = []
        for match in self.name_pattern.finditer(text):
            if match.group(1) not in names:
                names.append(match.group(1))
        return names

    def parse_field(self, line: str, entity_names: Set[str]) -> Optional[SchemaField]:
        """Parse one field line, or return None for lines that are not fields."""
        stripped = line.strip()
        if not stripped or stripped.startswith('//') or stripped.startswith('@@'):
            return None

        tokens = stripped.split()
        if len(tokens) < 2:
            return None

        name, type_name = tokens[0], tokens[1]
        if name.startswith('@'):
            return None

        is_array = type_name.endswith('[]')
        if is_array:
            type_name = type_name[:-2]

        is_optional = type_name.endswith('?')
        if is_optional:
            type_name = type_name[:-1]

        return SchemaField(
            name=name,
            type_name=type_name,
            is_relation=type_name in entity_names,
            is_optional=is_optional,
            is_array=is_array,
        )

    def parse_entities(self, text: str, entity_names: Sequence[str]) -> List[SchemaEntity]:
        """Pass 2: fields of every entity block."""
        known = set(entity_names)
        entities = []

        for match in self.block_pattern.finditer(text):
            entity = SchemaEntity(name=match.group(1))
            # Fields are newline separated; ';' also allowed for one-line blocks
            for line in re.split(r"[\n;]", match.group(2)):
                schema_field = self.parse_field(line, known)
                if schema_field is not None:
                    entity.fields.append(schema_field)
            entities.append(entity)

        return entities

    def parse(self, text: str) -> List[SchemaEntity]:
        names = self.collect_entity_names(text)
        return self.parse_entities(text, names)


def infer_relationships(entities: List[SchemaEntity]) -> List[RelationshipRecord]:
    """One relationship per unordered entity pair, taken from the first relation field seen.

    The reverse field is looked up by type only, so when two entities are linked
    by several fields the cardinality may come from an unrelated pair of fields.
    """
    by_name: Dict[str, SchemaEntity] = {entity.name: entity for entity in entities}
    seen: Set[Tuple[str, str]] = set()
    relationships: List[RelationshipRecord] = []

    for entity in entities:
        for schema_field in entity.fields:
            if not schema_field.is_relation:
                continue

            key = tuple(sorted((entity.name, schema_field.type_name)))
            if key in seen:
                continue
            seen.add(key)

            cardinality = Cardinality.ONE_TO_ONE
            if schema_field.is_array:
                target = by_name.get(schema_field.type_name)
                reverse = None
                if target is not None:
                    reverse = next(
                        (f for f in target.fields if f.is_relation and f.type_name == entity.name),
                        None,
                    )
                if reverse is not None and reverse.is_array:
                    cardinality = Cardinality.MANY_TO_MANY
                else:
                    cardinality = Cardinality.ONE_TO_MANY

            relationships.append(RelationshipRecord(
                from_entity=entity.name,
                to_entity=schema_field.type_name,
                cardinality=cardinality,
                field_name=schema_field.name,
            ))

    return relationships


class SchemaAnalyzer:
    """Locates the project's schema file and extracts entities from it."""

    def __init__(self, project_path: str, parser: SchemaParser = None):
        self.project_path = Path(project_path).resolve()
        self.parser = parser or SchemaParser()
        self.logger = app_logger.bind(component="schema_analyzer")

    def analyze(self) -> Optional[SchemaData]:
        schema_file = find_schema_file(self.project_path)
        if schema_file is None:
            self.logger.debug("No schema file found")
            return None

        content = read_text(schema_file)
        if content is None:
            return None

        entities = self.parser.parse(content)
        relationships = infer_relationships(entities)
        self.logger.info(f"Parsed {len(entities)} entities and {len(relationships)} relationships")

        return SchemaData(
            entities=entities,
            relationships=relationships,
            schema_file=relative_posix(schema_file, self.project_path),
            project_path=str(self.project_path),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )

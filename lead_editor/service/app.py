"""
Wiring of store, cache, schemas and rules into edit sessions.
"""

from typing import Any

from lead_editor import config
from lead_editor.core.rules import RuleConfigLoader, RuleEngine, default_rules
from lead_editor.core.schema import SchemaRegistry
from lead_editor.observability.logger import get_logger
from lead_editor.store import RecordStore, TTLCache, create_store

from .editor import SESSION_CLASSES, EditSession, RoomEditSession
from .records import RecordService
from .submitter import UpdateSubmitter

logger = get_logger(__name__)


class LeadEditor:
    """
    Entry point for the room, room type and property editors.

    Holds one store, one response cache shared by reads and submissions,
    the entity schemas and the validation rules per entity type.
    """

    def __init__(
        self,
        store: RecordStore,
        cache: TTLCache | None = None,
        schemas: SchemaRegistry | None = None,
        rules: dict[str, list[dict[str, Any]]] | None = None,
        strict: bool = False,
        check_duplicates: bool = True,
    ):
        """
        Args:
            store: Record store
            cache: Response cache (a fresh 5-minute cache by default)
            schemas: Entity schemas (built-in tables by default)
            rules: Entity type to rule configurations; entity types without
                   an entry get rules derived from their schema
            strict: Reject unparseable numeric and date input instead of clearing it
            check_duplicates: Check new room names against existing rooms before saving
        """
        self.store = store
        self.cache = cache if cache is not None else TTLCache()
        self.schemas = schemas or SchemaRegistry()
        self.rules = rules or {}
        self.strict = strict
        self.check_duplicates = check_duplicates

        self.records = RecordService(store, self.cache)
        self.submitter = UpdateSubmitter(store, self.cache)
        self._engines: dict[str, RuleEngine] = {}

    @classmethod
    def from_env(cls) -> "LeadEditor":
        """Build from environment variables (see lead_editor.config)."""
        config.load_env()

        schema_file = config.schema_path()
        schemas = SchemaRegistry.from_yaml(schema_file) if schema_file else SchemaRegistry()

        rules_file = config.rules_path()
        rules = RuleConfigLoader(rules_file).load_all() if rules_file else None

        return cls(
            store=create_store(schemas),
            cache=TTLCache(ttl_seconds=config.cache_ttl_seconds()),
            schemas=schemas,
            rules=rules,
            strict=config.strict_normalization(),
        )

    def rule_engine(self, entity_type: str) -> RuleEngine:
        if entity_type not in self._engines:
            schema = self.schemas.get(entity_type)
            rules = self.rules.get(entity_type)
            if rules is None:
                rules = default_rules(schema)
            self._engines[entity_type] = RuleEngine(rules, schema)
        return self._engines[entity_type]

    def open_session(self, entity_type: str, record_id: str, force_refresh: bool = False) -> EditSession:
        """
        Load a record and open an edit session on it.

        Raises:
            SchemaError: If the entity type is unknown
            RecordNotFoundError: If the record does not exist
        """
        schema = self.schemas.get(entity_type)
        baseline = self.records.get_record(entity_type, record_id, force_refresh=force_refresh)
        session_class = SESSION_CLASSES[entity_type]

        if session_class is RoomEditSession:
            return RoomEditSession(
                baseline,
                schema,
                self.submitter,
                self.rule_engine(entity_type),
                parent_property_name=self.records.get_parent_property_name(baseline),
                check_duplicates=self.check_duplicates,
                strict=self.strict,
            )
        return session_class(baseline, schema, self.submitter, self.rule_engine(entity_type), strict=self.strict)

    def close(self) -> None:
        self.store.close()

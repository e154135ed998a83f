# common/store.py
"""
Almacén de recursos: un repositorio por colección (`trips`, `drivers`,
`trucks`, `trailers`, `clients`, `dmtis`) con la misma interfaz:

    list() -> [T]
    get(id) -> T
    create(entity) -> T               (asigna identidad si viene vacía)
    update(id, changes, expected_version=None) -> T
    soft_delete(id)                   (lógico si la entidad es Recoverable)
    recover(id)

`InMemoryRepository` sirve para pruebas y demos; `DjangoRepository` persiste
con el ORM. Los repositorios se inyectan, nunca son globales.
"""
from __future__ import annotations

import contextlib
import copy
import dataclasses
import logging
import threading
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, Protocol, TypeVar

from django.db import transaction

from .entities import is_versioned, new_id, supports_soft_delete
from .errors import BusinessValidationError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")

COLLECTIONS = ("trips", "drivers", "trucks", "trailers", "clients", "dmtis")


class Repository(Protocol[T]):
    def list(self) -> list[T]: ...

    def get(self, entity_id: str) -> T: ...

    def create(self, entity: T) -> T: ...

    def update(self, entity_id: str, changes: Mapping[str, Any], expected_version: Optional[int] = None) -> T: ...

    def soft_delete(self, entity_id: str) -> None: ...

    def recover(self, entity_id: str) -> None: ...


def apply_changes(entity, changes: Mapping[str, Any], expected_version: Optional[int] = None):
    """
    Aplica un cambio parcial a una entidad y resuelve el sello de versión.
    No modifica `entity`; devuelve una copia.
    """
    changes = dict(changes)
    if changes.get("id", entity.id) != entity.id:
        raise BusinessValidationError("No se puede cambiar el identificador de un registro.")

    if is_versioned(type(entity)):
        if expected_version is not None and expected_version != entity.version:
            raise ConflictError(
                f"El registro {entity.id} fue modificado por otro usuario "
                f"(versión {entity.version}, se esperaba {expected_version})."
            )
        changes["version"] = entity.version + 1

    try:
        return dataclasses.replace(entity, **changes)
    except TypeError as exc:
        raise BusinessValidationError(f"Campos inválidos para {type(entity).__name__}: {exc}") from exc


class InMemoryRepository(Generic[T]):
    """Repositorio en memoria; devuelve siempre copias para que nadie mute el estado guardado."""

    def __init__(self, entity_cls: type, items: Iterable[T] = (), normalize: Optional[Callable[[T], T]] = None):
        self.entity_cls = entity_cls
        self._normalize = normalize or (lambda entity: entity)
        self._items: dict[str, T] = {}
        self._lock = threading.Lock()
        for item in items:
            self._items[item.id] = self._normalize(copy.deepcopy(item))

    def list(self) -> list[T]:
        return [copy.deepcopy(item) for item in self._items.values()]

    def get(self, entity_id: str) -> T:
        try:
            return copy.deepcopy(self._items[entity_id])
        except KeyError:
            raise NotFoundError(f"{self.entity_cls.__name__} {entity_id} no existe.") from None

    def create(self, entity: T) -> T:
        with self._lock:
            if not entity.id:
                entity = dataclasses.replace(entity, id=new_id())
            if entity.id in self._items:
                raise ConflictError(f"{self.entity_cls.__name__} {entity.id} ya existe.")
            stored = self._normalize(copy.deepcopy(entity))
            self._items[stored.id] = stored
        return copy.deepcopy(stored)

    def update(self, entity_id: str, changes: Mapping[str, Any], expected_version: Optional[int] = None) -> T:
        with self._lock:
            current = self._items.get(entity_id)
            if current is None:
                raise NotFoundError(f"{self.entity_cls.__name__} {entity_id} no existe.")
            updated = self._normalize(apply_changes(copy.deepcopy(current), changes, expected_version))
            self._items[entity_id] = updated
        return copy.deepcopy(updated)

    def soft_delete(self, entity_id: str) -> None:
        with self._lock:
            current = self._items.get(entity_id)
            if current is None:
                logger.debug("soft_delete ignorado: %s %s no existe", self.entity_cls.__name__, entity_id)
                return
            if supports_soft_delete(self.entity_cls):
                self._items[entity_id] = dataclasses.replace(current, is_deleted=True)
            else:
                del self._items[entity_id]

    def recover(self, entity_id: str) -> None:
        with self._lock:
            current = self._items.get(entity_id)
            if current is not None and supports_soft_delete(self.entity_cls):
                self._items[entity_id] = dataclasses.replace(current, is_deleted=False)


class DjangoRepository(Generic[T]):
    """
    Repositorio sobre un modelo de Django.
    El modelo debe exponer `to_entity()` y `fields_from_entity(entity)`.
    """

    def __init__(self, model, entity_cls: type):
        self.model = model
        self.entity_cls = entity_cls

    def _queryset(self):
        return self.model.objects.all()

    def _get_object(self, entity_id: str, for_update: bool = False):
        qs = self._queryset()
        if for_update:
            qs = qs.select_for_update()
        try:
            return qs.get(pk=entity_id)
        except self.model.DoesNotExist:
            raise NotFoundError(f"{self.entity_cls.__name__} {entity_id} no existe.") from None

    def _fields(self, entity) -> dict:
        fields = self.model.fields_from_entity(entity)
        if not entity.id:
            fields.pop("id", None)
        return fields

    def list(self) -> list[T]:
        return [obj.to_entity() for obj in self._queryset()]

    def get(self, entity_id: str) -> T:
        return self._get_object(entity_id).to_entity()

    def create(self, entity: T) -> T:
        with transaction.atomic():
            if entity.id and self.model.objects.filter(pk=entity.id).exists():
                raise ConflictError(f"{self.entity_cls.__name__} {entity.id} ya existe.")
            obj = self.model(**self._fields(entity))
            obj.save(force_insert=True)
        return self.get(obj.pk)

    def update(self, entity_id: str, changes: Mapping[str, Any], expected_version: Optional[int] = None) -> T:
        with transaction.atomic():
            obj = self._get_object(entity_id, for_update=True)
            updated = apply_changes(obj.to_entity(), changes, expected_version)
            for name, value in self._fields(updated).items():
                setattr(obj, name, value)
            obj.save()
        return self.get(entity_id)

    def soft_delete(self, entity_id: str) -> None:
        qs = self.model.objects.filter(pk=entity_id)
        if supports_soft_delete(self.entity_cls):
            qs.update(deleted=True)
        else:
            qs.delete()

    def recover(self, entity_id: str) -> None:
        if supports_soft_delete(self.entity_cls):
            self.model.objects.filter(pk=entity_id).update(deleted=False)


class ResourceStore:
    """
    Colecciones disponibles para el motor, por nombre.
    `atomic` agrupa las escrituras de una operación (transaction.atomic con el ORM).
    """

    def __init__(self, atomic: Optional[Callable] = None, **repositories: Repository):
        missing = set(COLLECTIONS) - set(repositories)
        if missing:
            raise ValueError(f"Faltan repositorios: {', '.join(sorted(missing))}")
        self._repositories = repositories
        self._atomic = atomic or contextlib.nullcontext

    def atomic(self):
        return self._atomic()

    def collection(self, name: str) -> Repository:
        try:
            return self._repositories[name]
        except KeyError:
            raise NotFoundError(f"Recurso desconocido: {name}") from None

    @property
    def trips(self) -> Repository:
        return self._repositories["trips"]

    @property
    def drivers(self) -> Repository:
        return self._repositories["drivers"]

    @property
    def trucks(self) -> Repository:
        return self._repositories["trucks"]

    @property
    def trailers(self) -> Repository:
        return self._repositories["trailers"]

    @property
    def clients(self) -> Repository:
        return self._repositories["clients"]

    @property
    def dmtis(self) -> Repository:
        return self._repositories["dmtis"]

from django.db import models

from .entities import new_id


class SoftDeleteQuerySet(models.QuerySet):
    def delete(self):
        # Borrado en lote desde el admin: también es lógico
        return super().update(deleted=True)

    def alive(self):
        return self.filter(deleted=False)


class SoftDeleteManager(models.Manager):
    """Solo registros vigentes."""
    def get_queryset(self):
        return SoftDeleteQuerySet(self.model, using=self._db).alive()


class SoftDeleteModel(models.Model):
    """
    Base de los catálogos y viajes con borrado lógico.
    `objects` ve todo (el almacén decide qué mostrar); `alive` solo los vigentes.
    """
    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    deleted = models.BooleanField(default=False, db_index=True)

    objects = SoftDeleteQuerySet.as_manager()
    alive = SoftDeleteManager()

    class Meta:
        abstract = True

    def delete(self, using=None, keep_parents=False):
        self.deleted = True
        self.save(update_fields=["deleted"])

from typing import Type, TypeVar, Generic, Optional
from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    def __init__(self, model: Type[T]):
        self.model = model

    def get(self, **filters) -> Optional[T]:
        return self.model.objects.filter(**filters).first()

    def get_for_update(self, **filters) -> Optional[T]:
        """Fetch one row and lock it until the surrounding transaction ends."""
        return self.model.objects.select_for_update().filter(**filters).first()

    def exists(self, **filters) -> bool:
        return self.model.objects.filter(**filters).exists()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update(self, obj: T, **data) -> T:
        for k, v in data.items():
            setattr(obj, k, v)
        obj.save(update_fields=list(data.keys()) or None)
        return obj

from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    # Credentials and token issuance are handled by the identity service; this
    # model only anchors ownership of carts and orders.
    email = models.EmailField(unique=True)

    @property
    def is_privileged(self) -> bool:
        return bool(self.is_staff or self.is_superuser)

    def __str__(self):
        return self.username

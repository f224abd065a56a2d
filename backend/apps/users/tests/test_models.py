import unittest

from apps.users.models import User


class UserModelTests(unittest.TestCase):
    def test_privilege_comes_from_staff_or_superuser(self):
        self.assertFalse(User(username="a").is_privileged)
        self.assertTrue(User(username="b", is_staff=True).is_privileged)
        self.assertTrue(User(username="c", is_superuser=True).is_privileged)

    def test_str(self):
        self.assertEqual(str(User(username="alice")), "alice")

import unittest
from types import SimpleNamespace

from tests.fakes import FakeBot, builder, member_with_roles, reaction
from utils.menu import ConfigurationError, Menu
from utils.paginator import RIGHT, PaginatorBuilder
from utils.waiter import EventWaiter


class AuthorizationTest(unittest.TestCase):
    def test_open_menu_allows_anyone(self):
        menu = Menu(None)
        self.assertTrue(menu.is_authorized(1))
        self.assertTrue(menu.is_authorized(2, member_with_roles()))

    def test_user_set(self):
        menu = Menu(None, users=[1, SimpleNamespace(id=2)])
        self.assertEqual(menu.users, {1, 2})
        self.assertTrue(menu.is_authorized(2))
        self.assertFalse(menu.is_authorized(3))
        self.assertFalse(menu.is_authorized(3, member_with_roles(5)))

    def test_role_set(self):
        menu = Menu(None, roles=[SimpleNamespace(id=5)])
        self.assertTrue(menu.is_authorized(3, member_with_roles(4, 5)))
        self.assertFalse(menu.is_authorized(3, member_with_roles(4)))
        self.assertFalse(menu.is_authorized(3))

    def test_resolve_member_prefers_payload(self):
        member = member_with_roles(1)
        menu = Menu(EventWaiter(FakeBot()))
        self.assertIs(menu.resolve_member(reaction(RIGHT, member=member, guild_id=1)), member)

    def test_resolve_member_outside_guild(self):
        menu = Menu(EventWaiter(FakeBot()))
        self.assertIsNone(menu.resolve_member(reaction(RIGHT)))

    def test_resolve_member_uncached_guild(self):
        menu = Menu(EventWaiter(FakeBot()))
        self.assertIsNone(menu.resolve_member(reaction(RIGHT, guild_id=77)))


class BuilderTest(unittest.TestCase):
    def test_requires_waiter(self):
        with self.assertRaises(ConfigurationError):
            PaginatorBuilder().set_items("a").build()

    def test_rejects_bad_numbers(self):
        bad = [
            lambda b: b.set_items_per_page(0),
            lambda b: b.set_columns(0),
            lambda b: b.set_columns(4).set_items_per_page(10),
            lambda b: b.set_columns(3).set_items_per_page(2),
            lambda b: b.set_timeout(0),
        ]
        for configure in bad:
            with self.assertRaises(ConfigurationError):
                configure(builder(FakeBot(), 5)).build()

    def test_configuration_error_is_value_error(self):
        with self.assertRaises(ValueError):
            builder(FakeBot(), 5).set_items_per_page(-1).build()

    def test_items_helpers(self):
        p = builder(FakeBot()).set_items("a", "b").add_items("c").build()
        self.assertEqual(p.items, ("a", "b", "c"))
        p = builder(FakeBot(), 3).clear_items().add_items(1, 2).build()
        self.assertEqual(p.items, ("1", "2"))

    def test_users_and_roles_accept_objects(self):
        p = (
            builder(FakeBot(), 1)
            .set_users(SimpleNamespace(id=1))
            .add_users(2)
            .set_roles(3)
            .add_roles(SimpleNamespace(id=4))
            .build()
        )
        self.assertEqual(p.users, {1, 2})
        self.assertEqual(p.roles, {3, 4})

    def test_object_and_its_id_are_one_entry(self):
        p = (
            builder(FakeBot(), 1)
            .set_users(SimpleNamespace(id=1), 1)
            .add_users(SimpleNamespace(id=1))
            .set_roles(SimpleNamespace(id=3))
            .add_roles(3)
            .build()
        )
        self.assertEqual(p.users, {1})
        self.assertEqual(p.roles, {3})

    def test_defaults(self):
        p = builder(FakeBot(), 1).build()
        self.assertEqual((p.columns, p.items_per_page, p.timeout), (1, 12, 60.0))
        self.assertTrue(p.show_page_numbers)
        self.assertFalse(p.number_items)
        self.assertIsNone(p.text)
        self.assertIsNone(p.color(1, 1))


if __name__ == "__main__":
    unittest.main()

import unittest

from explainer.services.explain.memory import Exchange, MemoryStore, SessionMemoryRegistry


class MemoryStoreTests(unittest.TestCase):
    def test_sixth_append_evicts_the_oldest(self) -> None:
        store = MemoryStore()
        for idx in range(6):
            store.append(f"q{idx}", f"a{idx}")

        recent = store.recent()
        self.assertEqual(len(recent), 5)
        self.assertNotIn(Exchange("q0", "a0"), recent)
        self.assertEqual([ex.message for ex in recent], ["q1", "q2", "q3", "q4", "q5"])

    def test_length_never_exceeds_capacity(self) -> None:
        store = MemoryStore(capacity=5)
        for idx in range(20):
            store.append(str(idx), "")
            self.assertLessEqual(len(store), 5)

    def test_recent_returns_a_copy(self) -> None:
        store = MemoryStore()
        store.append("q", "a")

        snapshot = store.recent()
        snapshot.clear()

        self.assertEqual(store.recent(), [Exchange("q", "a")])


class SessionMemoryRegistryTests(unittest.TestCase):
    def test_sessions_are_isolated_by_default(self) -> None:
        registry = SessionMemoryRegistry()
        registry.for_session("alice").append("q", "a")

        self.assertEqual(len(registry.for_session("alice")), 1)
        self.assertEqual(registry.for_session("bob").recent(), [])

    def test_shared_scope_uses_one_store(self) -> None:
        registry = SessionMemoryRegistry(scope="shared")
        registry.for_session("alice").append("q", "a")

        self.assertIs(registry.for_session("alice"), registry.for_session("bob"))
        self.assertEqual(len(registry.for_session("bob")), 1)

    def test_least_recently_used_session_is_evicted(self) -> None:
        registry = SessionMemoryRegistry(max_sessions=2)
        registry.for_session("a").append("q", "a")
        registry.for_session("b").append("q", "b")
        registry.for_session("a")
        registry.for_session("c")

        self.assertEqual(len(registry.for_session("a")), 1)
        self.assertEqual(len(registry.for_session("b")), 0)


if __name__ == "__main__":
    unittest.main()

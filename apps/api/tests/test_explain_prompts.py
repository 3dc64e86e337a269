import unittest

from explainer.services.explain.memory import Exchange, MemoryStore
from explainer.services.explain.prompts import SYSTEM_PROMPT, build_user_prompt, compose_prompts
from explainer.services.explain.validator import validate_request


class PromptComposerTests(unittest.TestCase):
    def _request(self, mode: str = "normal", want_roadmap: bool = False):
        return validate_request({"message": "How do closures work?", "mode": mode, "wantRoadmap": want_roadmap})

    def test_system_prompt_is_mode_independent(self) -> None:
        eli5_system, _ = compose_prompts(self._request("eli5"))
        expert_system, _ = compose_prompts(self._request("expert"))

        self.assertEqual(eli5_system, expert_system)
        self.assertEqual(eli5_system, SYSTEM_PROMPT)
        self.assertIn("teaching assistant", SYSTEM_PROMPT)
        self.assertIn("ONE short clarifying question", SYSTEM_PROMPT)

    def test_mode_directive_leads_the_user_prompt(self) -> None:
        self.assertTrue(build_user_prompt(self._request("eli5")).startswith("Explain simply for a child"))
        self.assertTrue(build_user_prompt(self._request("normal")).startswith("Explain clearly for a beginner"))
        self.assertTrue(build_user_prompt(self._request("expert")).startswith("Give a detailed, technical"))

    def test_roadmap_directive_and_key_only_when_requested(self) -> None:
        plain = build_user_prompt(self._request(want_roadmap=False))
        with_roadmap = build_user_prompt(self._request(want_roadmap=True))

        self.assertNotIn('"roadmap"', plain)
        self.assertNotIn("6-8 steps", plain)
        self.assertIn('"roadmap"', with_roadmap)
        self.assertIn("6-8 steps", with_roadmap)
        self.assertIn("{stepName, action, timeEstimate, resources, exercise}", with_roadmap)

    def test_output_contract_precedes_quoted_message(self) -> None:
        prompt = build_user_prompt(self._request())

        self.assertIn("Do not include anything outside the JSON object.", prompt)
        self.assertTrue(prompt.endswith('User query: "How do closures work?"'))
        self.assertLess(prompt.index('"explanation"'), prompt.index("User query:"))

    def test_empty_history_adds_no_context_block(self) -> None:
        self.assertNotIn("Previous question", build_user_prompt(self._request(), []))

    def test_history_is_prepended_oldest_first(self) -> None:
        history = [Exchange("first?", "one"), Exchange("second?", "two")]

        prompt = build_user_prompt(self._request(), history)

        self.assertTrue(prompt.startswith('Previous question 1: "first?"\nPrevious answer 1: "one"\n\n'))
        self.assertLess(prompt.index("second?"), prompt.index("Explain clearly"))

    def test_history_is_bounded_to_five_most_recent(self) -> None:
        history = [Exchange(f"q{idx}", f"a{idx}") for idx in range(7)]

        prompt = build_user_prompt(self._request(), history)

        self.assertNotIn('"q0"', prompt)
        self.assertNotIn('"q1"', prompt)
        self.assertIn('Previous question 1: "q2"', prompt)
        self.assertIn('Previous question 5: "q6"', prompt)

    def test_composing_does_not_mutate_memory(self) -> None:
        store = MemoryStore()
        for idx in range(3):
            store.append(f"q{idx}", f"a{idx}")

        compose_prompts(self._request(), store.recent())

        self.assertEqual([ex.message for ex in store.recent()], ["q0", "q1", "q2"])


if __name__ == "__main__":
    unittest.main()

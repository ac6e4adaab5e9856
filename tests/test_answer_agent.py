from __future__ import annotations

from agents.answer_agent import NO_CONTENT_ANSWER, AnswerAgent


class FakeLLM:
    def __init__(self, reply="  the answer  "):
        self.reply = reply
        self.prompts = []

    def ask(self, prompt):
        self.prompts.append(prompt)
        return self.reply


class TestAnswerAgent:
    def test_answers_from_context(self, engine):
        engine.process_text("xxxxyyyy")
        llm = FakeLLM()
        answer = AnswerAgent(engine, llm).answer("x?")

        assert answer.text == "the answer"
        assert [c.content_chunk for c in answer.sources] == ["xxxx"]
        assert "xxxx" in llm.prompts[0]
        assert "yyyy" not in llm.prompts[0]
        assert "x?" in llm.prompts[0]

    def test_no_content_skips_llm(self, engine):
        llm = FakeLLM()
        answer = AnswerAgent(engine, llm).answer("x?")

        assert answer.text == NO_CONTENT_ANSWER
        assert answer.sources == []
        assert llm.prompts == []

from abc import ABC, abstractmethod


class AnswerStorePort(ABC):
    @abstractmethod
    def store_generated_qa(self, question: str, ideal_answer: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_stored_answer(self, question: str) -> str | None:
        raise NotImplementedError

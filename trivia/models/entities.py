"""Trivia Entities - Agregados Quiz e Course (modelos Pydantic)."""

from uuid import uuid4

from pydantic import BaseModel, Field

from ..config import INCORRECT_ANSWER_COUNT
from .enums import QuizType, ResourceType


def new_id() -> str:
    """Gera ID globalmente unico para entidades."""
    return uuid4().hex


class Question(BaseModel):
    """Pergunta de um quiz."""

    id: str = Field(default_factory=new_id, description="ID unico da pergunta")
    text: str = Field(..., description="Enunciado da pergunta")
    correct_answer: str = Field(..., description="Resposta correta")
    incorrect_answers: list[str] = Field(
        default_factory=list, description="Respostas incorretas (multipla escolha)"
    )

    def is_valid_for(self, quiz_type: QuizType | None) -> bool:
        """Verifica se a pergunta pode entrar numa partida do tipo dado.

        Quiz sem tipo definido nao tem perguntas jogaveis, mesmo as que
        ja tem respostas incorretas suficientes: o tipo precisa ser
        escolhido antes de publicar ou jogar.
        """
        if quiz_type == QuizType.SINGLE_ANSWER:
            return True
        if quiz_type == QuizType.MULTIPLE_CHOICE:
            return len(self.incorrect_answers) >= INCORRECT_ANSWER_COUNT
        return False


class Quiz(BaseModel):
    """Quiz em rascunho ou publicado.

    ``name`` e ``type`` podem estar vazios durante a criacao; isso e o
    estado de rascunho incompleto, nao um erro.
    """

    id: str = Field(default_factory=new_id, description="ID do quiz (imutavel)")
    name: str = Field(default="", description="Nome do quiz")
    type: QuizType | None = Field(default=None, description="Tipo do quiz")
    questions: list[Question] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return bool(self.name) and self.type is not None

    def valid_questions(self) -> list[Question]:
        """Perguntas jogaveis segundo o tipo atual do quiz."""
        return [q for q in self.questions if q.is_valid_for(self.type)]

    def valid_question_count(self) -> int:
        return len(self.valid_questions())


class Resource(BaseModel):
    """Recurso de uma licao (texto, link, video ou quiz)."""

    id: str = Field(default_factory=new_id, description="ID sintetico estavel")
    name: str
    type: ResourceType
    content: str = Field(..., description="Conteudo; para type=quiz, ID do quiz")
    pretext: str = Field(default="", description="Texto exibido antes do recurso")


class Lesson(BaseModel):
    """Licao de um curso, endereçada por posicao na interface."""

    id: str = Field(default_factory=new_id, description="ID sintetico estavel")
    name: str
    introduction: str
    resources: list[Resource] = Field(default_factory=list)


class Course(BaseModel):
    """Curso em rascunho ou publicado."""

    id: str = Field(default_factory=new_id, description="ID do curso (imutavel)")
    name: str = Field(default="")
    description: str = Field(default="")
    lessons: list[Lesson] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.description)

    def lesson_id_at(self, index: int) -> str | None:
        """Traduz indice posicional para o ID estavel da licao."""
        if 0 <= index < len(self.lessons):
            return self.lessons[index].id
        return None

    def find_lesson(self, lesson_id: str) -> Lesson | None:
        return next((lesson for lesson in self.lessons if lesson.id == lesson_id), None)

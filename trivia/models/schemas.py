"""Trivia Schemas - Modelos Pydantic para request/response e views."""

from pydantic import BaseModel, Field

# =============================================================================
# REQUESTS - AUTORIA DE QUIZ
# =============================================================================


class CreateQuizRequest(BaseModel):
    """Request para criar um rascunho de quiz."""

    quiz_id: str | None = Field(None, description="ID do post ancora (gerado se vazio)")


class SetNameRequest(BaseModel):
    name: str = Field(..., description="Novo nome")


class SetQuizTypeRequest(BaseModel):
    type: str = Field(..., description="single-answer ou multiple-choice")


class AddQuestionRequest(BaseModel):
    """Request para adicionar pergunta ao quiz."""

    text: str = Field(..., description="Enunciado")
    correct_answer: str = Field(..., description="Resposta correta")
    incorrect_answers: list[str] = Field(
        default_factory=list, description="Respostas incorretas (min. 3 em multipla escolha)"
    )


class RemoveQuestionsRequest(BaseModel):
    question_ids: list[str] = Field(..., description="IDs das perguntas a remover")


# =============================================================================
# REQUESTS - AUTORIA DE CURSO
# =============================================================================


class CreateCourseRequest(BaseModel):
    course_id: str | None = Field(None, description="ID do post ancora (gerado se vazio)")


class SetDescriptionRequest(BaseModel):
    description: str


class AddLessonRequest(BaseModel):
    name: str
    introduction: str


class SetIntroductionRequest(BaseModel):
    introduction: str


class AddResourceRequest(BaseModel):
    """Request para adicionar recurso a uma licao."""

    name: str
    type: str = Field(..., description="text, link, video ou quiz")
    content: str
    pretext: str = ""


class AddQuizResourceRequest(BaseModel):
    name: str
    quiz_id: str
    pretext: str = ""


class RemoveResourcesRequest(BaseModel):
    indices: list[int] = Field(..., description="Indices dos recursos a remover")


# =============================================================================
# REQUESTS - PARTIDA
# =============================================================================


class StartGameRequest(BaseModel):
    """Request para iniciar uma partida."""

    quiz_id: str
    type: str = Field(..., description="solo ou party")
    scoring_type: str = Field(..., description="all ou first")
    number_of_questions: int = Field(
        default=0, description="Numero de perguntas (<=0 ou acima do valido = todas)"
    )
    game_id: str | None = Field(None, description="ID do post ancora (gerado se vazio)")


class SubmitAnswerRequest(BaseModel):
    """Resposta de um jogador.

    ``answer`` e texto em quizzes de resposta unica e o indice da
    alternativa em quizzes de multipla escolha.
    """

    question_id: str
    answer: int | str


class NextQuestionRequest(BaseModel):
    question_id: str


class BindPostRequest(BaseModel):
    post_id: str


# =============================================================================
# VIEWS - AUTORIA
# =============================================================================


class QuestionSummary(BaseModel):
    id: str
    text: str
    correct_answer: str
    incorrect_answers: list[str]
    valid: bool


class QuizView(BaseModel):
    """Resumo do rascunho de quiz e acoes disponiveis."""

    id: str
    name: str
    type: str | None
    complete: bool
    question_count: int
    valid_question_count: int
    questions: list[QuestionSummary]
    actions: list[str]


class LessonSummary(BaseModel):
    index: int
    name: str
    resource_count: int


class CourseView(BaseModel):
    id: str
    name: str
    description: str
    complete: bool
    lessons: list[LessonSummary]
    actions: list[str]


class ResourceView(BaseModel):
    index: int
    name: str
    type: str
    content: str
    pretext: str


class LessonView(BaseModel):
    course_id: str
    index: int
    name: str
    introduction: str
    resources: list[ResourceView]
    actions: list[str]


class CatalogEntry(BaseModel):
    id: str
    name: str


# =============================================================================
# VIEWS - PARTIDA
# =============================================================================


class QuestionView(BaseModel):
    """Pergunta atual de uma partida."""

    game_id: str
    quiz_name: str
    question_id: str
    text: str
    number: int
    total: int
    choices: list[str] = Field(default_factory=list)
    answered_count: int | None = Field(None, description="Apenas em partidas party")
    actions: list[str]


class SolutionView(BaseModel):
    """Solucao da pergunta encerrada."""

    game_id: str
    question_id: str
    text: str
    number: int
    total: int
    correct_answer: str
    right_answerers: list[str] | None = Field(None, description="Apenas em partidas party")


class ScoreRow(BaseModel):
    username: str
    score: int


class ScoreView(BaseModel):
    game_id: str
    type: str
    rows: list[ScoreRow]


class GameEndView(BaseModel):
    game_id: str
    quiz_name: str
    scores: ScoreView
    winner: str | None = None


class AdvanceResult(BaseModel):
    """Resultado de uma transicao de pergunta."""

    solution: SolutionView
    question: QuestionView | None = None
    end: GameEndView | None = None

    @property
    def finished(self) -> bool:
        return self.end is not None


class AnswerResult(BaseModel):
    """Resultado de uma resposta submetida."""

    correct: bool
    message: str
    points_earned: int
    question: QuestionView | None = Field(None, description="Pergunta re-renderizada (party)")
    advance: AdvanceResult | None = Field(None, description="Transicao (solo)")

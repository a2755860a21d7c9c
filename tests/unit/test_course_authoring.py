# =============================================================================
# TESTES - Course Authoring Engine
# =============================================================================

import pytest


async def _course_with_lessons(engine, course_id="c", lessons=2):
    await engine.create(course_id)
    await engine.set_name(course_id, "Python")
    await engine.set_description(course_id, "Curso basico")
    for i in range(lessons):
        course = await engine.add_lesson(course_id, f"Licao {i}", f"Intro {i}")
    return course


class TestCourseEdits:
    """Testes para nome, descricao e licoes."""

    @pytest.mark.asyncio
    async def test_create_and_complete(self, course_engine):
        course = await course_engine.create("c")
        assert not course.is_complete

        await course_engine.set_name("c", "Python")
        course = await course_engine.set_description("c", "Curso basico")

        assert course.is_complete

    @pytest.mark.asyncio
    async def test_blank_description(self, course_engine):
        from trivia.exceptions import ValidationError

        await course_engine.create("c")

        with pytest.raises(ValidationError) as exc_info:
            await course_engine.set_description("c", "")

        assert "description" in exc_info.value.field_errors

    @pytest.mark.asyncio
    async def test_add_lesson_requires_both_fields(self, course_engine):
        from trivia.exceptions import ValidationError

        await course_engine.create("c")

        with pytest.raises(ValidationError):
            await course_engine.add_lesson("c", "Intro", " ")

    @pytest.mark.asyncio
    async def test_lessons_get_stable_ids(self, course_engine):
        course = await _course_with_lessons(course_engine)

        ids = [lesson.id for lesson in course.lessons]

        assert len(set(ids)) == 2

    @pytest.mark.asyncio
    async def test_edit_lesson(self, course_engine):
        await _course_with_lessons(course_engine)

        await course_engine.edit_lesson_name("c", 1, "Funcoes")
        course = await course_engine.edit_lesson_introduction("c", 1, "def e return")

        assert course.lessons[1].name == "Funcoes"
        assert course.lessons[1].introduction == "def e return"
        assert course.lessons[0].name == "Licao 0"

    @pytest.mark.asyncio
    async def test_edit_stale_index(self, course_engine, store):
        """Indice obsoleto gera NotFoundError sem alterar o curso."""
        from trivia.exceptions import NotFoundError

        await _course_with_lessons(course_engine)
        await course_engine.remove_lesson("c", 1)

        with pytest.raises(NotFoundError) as exc_info:
            await course_engine.edit_lesson_name("c", 1, "Funcoes")

        assert exc_info.value.message == "Lesson not found. Please go back."
        assert [lesson.name for lesson in (await store.get_course("c")).lessons] == ["Licao 0"]

    @pytest.mark.asyncio
    async def test_get_lesson_out_of_range(self, course_engine):
        from trivia.exceptions import NotFoundError

        await _course_with_lessons(course_engine)

        with pytest.raises(NotFoundError):
            await course_engine.get_lesson("c", 5)
        with pytest.raises(NotFoundError):
            await course_engine.get_lesson("c", -1)


class TestCourseResources:
    """Testes para recursos das licoes."""

    @pytest.mark.asyncio
    async def test_add_resource(self, course_engine):
        await _course_with_lessons(course_engine)

        course = await course_engine.add_resource(
            "c", 0, "Docs", "link", "https://docs.python.org", pretext=" Leia: "
        )

        resource = course.lessons[0].resources[0]
        assert resource.type.value == "link"
        assert resource.pretext == "Leia:"

    @pytest.mark.asyncio
    async def test_add_resource_invalid_type(self, course_engine):
        from trivia.exceptions import ValidationError

        await _course_with_lessons(course_engine)

        with pytest.raises(ValidationError) as exc_info:
            await course_engine.add_resource("c", 0, "Docs", "podcast", "x")

        assert "type" in exc_info.value.field_errors

    @pytest.mark.asyncio
    async def test_add_resource_missing_content(self, course_engine):
        from trivia.exceptions import ValidationError

        await _course_with_lessons(course_engine)

        with pytest.raises(ValidationError):
            await course_engine.add_resource("c", 0, "Docs", "text", "")

    @pytest.mark.asyncio
    async def test_add_quiz_resource(self, course_engine, store, single_answer_quiz):
        await store.save_quiz(single_answer_quiz)
        await _course_with_lessons(course_engine)

        course = await course_engine.add_quiz_resource("c", 0, "Teste", single_answer_quiz.id)

        resource = course.lessons[0].resources[0]
        assert resource.type.value == "quiz"
        assert resource.content == single_answer_quiz.id

    @pytest.mark.asyncio
    async def test_add_quiz_resource_unknown_quiz(self, course_engine):
        from trivia.exceptions import NotFoundError

        await _course_with_lessons(course_engine)

        with pytest.raises(NotFoundError) as exc_info:
            await course_engine.add_quiz_resource("c", 0, "Teste", "fantasma")

        assert exc_info.value.details["field_errors"] == {"quiz": "Quiz not found"}

    @pytest.mark.asyncio
    async def test_remove_resources_high_to_low(self, course_engine):
        """Remocao de varios indices remove exatamente os escolhidos."""
        await _course_with_lessons(course_engine)
        for name in ["r0", "r1", "r2", "r3"]:
            await course_engine.add_resource("c", 0, name, "text", "conteudo")

        course = await course_engine.remove_resources("c", 0, [0, 2, 2, 9])

        assert [r.name for r in course.lessons[0].resources] == ["r1", "r3"]


class TestCoursePublish:
    """Testes para publicacao e descarte."""

    @pytest.mark.asyncio
    async def test_publish_without_lessons(self, course_engine):
        from trivia.exceptions import ValidationError

        await course_engine.create("c")

        with pytest.raises(ValidationError):
            await course_engine.publish("c")

    @pytest.mark.asyncio
    async def test_publish_and_list(self, course_engine):
        await _course_with_lessons(course_engine)

        await course_engine.publish("c")
        await course_engine.publish("c")

        courses = await course_engine.list_available()
        assert [course.id for course in courses] == ["c"]

    @pytest.mark.asyncio
    async def test_discard(self, course_engine, store):
        await _course_with_lessons(course_engine)
        await course_engine.publish("c")

        await course_engine.discard("c")

        assert await store.get_course("c") is None
        assert await store.get_list("courseList") == []

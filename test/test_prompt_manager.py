import pytest
from app.utils.prompt_manager import PromptManager, PromptTemplate
from pathlib import Path
import tempfile


class TestPromptManager:
    """Тесты для системы управления промптами"""

    def test_list_templates(self):
        """Тест: получение списка доступных шаблонов"""
        from app.utils.prompt_manager import prompt_manager

        templates = prompt_manager.list_templates()
        assert templates == ["chat_header", "chat_instructions", "task_summary"]

    def test_render_chat_header(self):
        """Тест: рендеринг заголовка промпта"""
        from app.utils.prompt_manager import prompt_manager

        rendered = prompt_manager.render(
            "chat_header",
            user_name="Dana",
            streak=3,
            completed=1,
            total=2,
            pending=1,
            completion_rate=50,
        )

        assert "Dana" in rendered
        assert "Current streak: 3 days" in rendered
        assert "(50% completion rate)" in rendered
        assert not rendered.endswith("\n")

    def test_custom_prompt_manager(self):
        """Тест: создание кастомного менеджера промптов"""
        with tempfile.TemporaryDirectory() as temp_dir:
            template_path = Path(temp_dir) / "test_template.md"
            template_path.write_text("Hello {name}!\n", encoding='utf-8')

            manager = PromptManager(temp_dir)

            assert manager.list_templates() == ["test_template"]
            assert manager.render("test_template", name="World") == "Hello World!"

    def test_template_not_found(self):
        """Тест: обработка отсутствующего шаблона"""
        from app.utils.prompt_manager import prompt_manager

        with pytest.raises(FileNotFoundError):
            prompt_manager.render("nonexistent_template")

    def test_prompt_template_class(self):
        """Тест: работа класса PromptTemplate"""
        with tempfile.TemporaryDirectory() as temp_dir:
            template_path = Path(temp_dir) / "test.md"
            template_path.write_text("Test {value}", encoding='utf-8')

            template = PromptTemplate(template_path)

            assert template.load() == "Test {value}"
            assert template.format(value="123") == "Test 123"

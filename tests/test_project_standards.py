from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]


def test_required_project_files_exist():
    required_paths = [
        PROJECT_ROOT / "README.md",
        PROJECT_ROOT / ".gitignore",
        PROJECT_ROOT / ".env.example",
        PROJECT_ROOT / "pyproject.toml",
    ]
    missing = [str(path) for path in required_paths if not path.exists()]
    assert not missing, f"Missing required project files: {missing}"


def test_env_example_lists_every_setting():
    env_example = (PROJECT_ROOT / ".env.example").read_text(encoding="utf-8")
    for name in ["REPORT_STORE_PATH", "REPORT_MAX_REPORTS", "BATCH_MAX_FILES", "RUN_LOG_DIR", "DEBUG"]:
        assert name in env_example


def test_gitignore_covers_main_runtime_artifacts():
    gitignore = (PROJECT_ROOT / ".gitignore").read_text(encoding="utf-8")
    for pattern in [".venv/", ".env", "outputs/*"]:
        assert pattern in gitignore


def test_readme_contains_quickstart_and_test_sections():
    readme = (PROJECT_ROOT / "README.md").read_text(encoding="utf-8")
    assert "Quick start" in readme
    assert "python -m pytest" in readme

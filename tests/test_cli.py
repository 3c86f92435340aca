import safelyq.cli as cli_module


def test_call_dispatches_tool_without_model(capsys) -> None:
    exit_code = cli_module.main(["--call", "get_business_info", "--args", '{"business_name": "  "}'])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "Please specify a business name."


def test_call_unknown_tool_exits_with_usage_error(capsys) -> None:
    exit_code = cli_module.main(["--call", "book_table"])

    assert exit_code == 2
    assert "Unknown tool: book_table" in capsys.readouterr().err


def test_call_rejects_non_object_arguments(capsys) -> None:
    exit_code = cli_module.main(["--call", "get_business_info", "--args", "[1, 2]"])

    assert exit_code == 2
    assert "Invalid arguments" in capsys.readouterr().err


class EchoAgent:
    def __init__(self) -> None:
        self.prompts = []

    async def arun(self, prompt, callbacks=None):
        self.prompts.append(prompt)
        return f"echo: {prompt}"


def test_repl_skips_blank_input_and_exits_case_insensitively(monkeypatch, capsys) -> None:
    agent = EchoAgent()
    monkeypatch.setattr(cli_module, "build_agent", lambda settings, registry: agent)
    lines = iter(["", "   ", "my appointments", "ExIt", "never read"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

    exit_code = cli_module.main([])

    assert exit_code == 0
    assert agent.prompts == ["my appointments"]
    out = capsys.readouterr().out
    assert cli_module.BANNER in out
    assert "echo: my appointments" in out


def test_repl_stops_on_end_of_input(monkeypatch) -> None:
    agent = EchoAgent()
    monkeypatch.setattr(cli_module, "build_agent", lambda settings, registry: agent)

    def _eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)

    assert cli_module.main([]) == 0
    assert agent.prompts == []


def test_prompt_mode_without_api_key_reports_unavailable(monkeypatch, capsys) -> None:
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

    assert cli_module.main(["--prompt", "hello"]) == 1
    assert "GOOGLE_API_KEY" in capsys.readouterr().err


def test_unknown_enabled_tool_is_reported_as_configuration_error(monkeypatch, capsys) -> None:
    monkeypatch.setenv("SAFELYQ_ENABLED_TOOLS", "get_business_info,book_table")

    exit_code = cli_module.main(["--call", "get_business_info"])

    err = capsys.readouterr().err
    assert exit_code == 1
    assert "Configuration error" in err
    assert "book_table" in err
    assert "Invalid arguments" not in err

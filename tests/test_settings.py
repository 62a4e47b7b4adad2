from allayls.settings import DEFAULT_EXCLUDE_DIRS, AllaySettings


def test_defaults():
    settings = AllaySettings()

    assert settings.config_file == "allay.toml"
    assert settings.param_section == "Param"
    assert settings.templates_dir == "templates"
    assert settings.shortcodes_dir == "shortcodes"
    assert settings.extensions == ("html", "md")
    assert settings.exclude_dirs == DEFAULT_EXCLUDE_DIRS


def test_missing_options_give_defaults():
    assert AllaySettings.from_initialization_options(None) == AllaySettings()
    assert AllaySettings.from_initialization_options({}) == AllaySettings()
    assert AllaySettings.from_initialization_options("bad") == AllaySettings()


def test_options_override_defaults():
    settings = AllaySettings.from_initialization_options(
        {
            "configFile": "site.toml",
            "templatesDir": "layouts",
            "shortcodesDir": "partials",
            "extensions": [".html", "njk"],
            "excludeDirs": ["dist"],
            "unknown": True,
        }
    )

    assert settings.config_file == "site.toml"
    assert settings.templates_dir == "layouts"
    assert settings.shortcodes_dir == "partials"
    assert settings.extensions == ("html", "njk")
    assert settings.exclude_dirs == frozenset({"dist"})


def test_wrongly_typed_options_are_ignored():
    settings = AllaySettings.from_initialization_options(
        {
            "configFile": 42,
            "templatesDir": "",
            "extensions": "html",
            "excludeDirs": ["ok", 1],
        }
    )

    assert settings == AllaySettings()


def test_empty_exclude_dirs_disables_exclusion():
    settings = AllaySettings.from_initialization_options({"excludeDirs": []})

    assert settings.exclude_dirs == frozenset()

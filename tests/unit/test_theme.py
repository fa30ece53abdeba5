from frontdesk.theme import Palette, Theme, ThemeController, resolve_style


class TestResolveStyle:
    def test_dark_palette(self) -> None:
        palette = resolve_style(Theme.DARK)

        assert palette.background == "#0d0d0d"
        assert palette.input_background == "#141414"
        assert palette.text == "#e6e6e6"

    def test_buttons_match_across_themes(self) -> None:
        light, dark = resolve_style(Theme.LIGHT), resolve_style(Theme.DARK)

        assert (light.primary, light.success, light.cancel) == (dark.primary, dark.success, dark.cancel)
        assert light.background != dark.background

    def test_toggled(self) -> None:
        assert Theme.LIGHT.toggled() is Theme.DARK
        assert Theme.DARK.toggled() is Theme.LIGHT


class TestThemeController:
    def test_subscribe_applies_current_theme(self) -> None:
        seen: list[Theme] = []
        controller = ThemeController(Theme.DARK)

        controller.subscribe(lambda theme, _: seen.append(theme))

        assert seen == [Theme.DARK]

    def test_toggle_notifies_every_listener(self) -> None:
        first: list[Palette] = []
        second: list[Palette] = []
        controller = ThemeController()
        controller.subscribe(lambda _, palette: first.append(palette))
        controller.subscribe(lambda _, palette: second.append(palette))

        assert controller.toggle() is Theme.DARK
        assert first[-1] == second[-1] == resolve_style(Theme.DARK)

    def test_failing_listener_does_not_block_others(self) -> None:
        seen: list[Theme] = []
        controller = ThemeController()

        def broken(theme: Theme, palette: Palette) -> None:
            raise RuntimeError("window already closed")

        controller.subscribe(broken)
        controller.subscribe(lambda theme, _: seen.append(theme))
        controller.set_theme(Theme.DARK)

        assert seen == [Theme.LIGHT, Theme.DARK]
        assert controller.theme is Theme.DARK

    def test_setting_same_theme_is_a_no_op(self) -> None:
        calls: list[Theme] = []
        controller = ThemeController()
        controller.subscribe(lambda theme, _: calls.append(theme))

        controller.set_theme(Theme.LIGHT)

        assert calls == [Theme.LIGHT]

    def test_unsubscribe(self) -> None:
        calls: list[Theme] = []
        controller = ThemeController()
        unsubscribe = controller.subscribe(lambda theme, _: calls.append(theme))

        unsubscribe()
        controller.toggle()

        assert calls == [Theme.LIGHT]

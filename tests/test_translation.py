from utils.translation import translate


def test_translate_falls_back_to_template():
    result = translate("Member.WELCOMEBACK", "Welcome Back, {firstname}", {"firstname": "Sam"})
    assert result == "Welcome Back, Sam"


def test_translate_uses_catalog_for_locale():
    result = translate(
        "Member.WELCOMEBACK", "Welcome Back, {firstname}", {"firstname": "Sam"}, locale="fr_FR"
    )
    assert result == "Bienvenue, Sam"


def test_translate_unknown_locale_uses_template():
    assert translate("Member.PASSWORDEXPIRED", "Expired.", locale="xx_XX") == "Expired."


def test_translate_keeps_unmatched_placeholders():
    assert translate("Some.KEY", "Hello {firstname} {surname}", {"firstname": "Sam"}) == "Hello Sam {surname}"

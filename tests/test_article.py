from dataclasses import fields, replace

import pytest

from bubblelab.content.article import ArticleText, Language, article_text


def test_default_language_is_chinese() -> None:
    text = article_text()

    assert text is article_text(Language.ZH)
    assert text.hero_title == "冒泡的美"


def test_english_text_is_available() -> None:
    text = article_text("en")

    assert text.hero_title == "The Beauty of Bubbles"
    assert text.quote_author == "Lord Kelvin (1824-1907)"
    assert text.mechanics_title != article_text(Language.ZH).mechanics_title


def test_both_languages_fill_every_field() -> None:
    for language in Language:
        text = article_text(language)
        for item in fields(ArticleText):
            value = getattr(text, item.name)
            if isinstance(value, str):
                assert value.strip()
        assert len(text.intro_topics) == 3
        assert len(text.more_topics) == 3
        assert all(topic.title and topic.body for topic in text.intro_topics)


def test_empty_text_is_rejected() -> None:
    with pytest.raises(ValueError):
        replace(article_text(Language.EN), hero_title="  ")


def test_unknown_language_raises() -> None:
    with pytest.raises(ValueError):
        article_text("fr")

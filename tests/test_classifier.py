import pytest

from medroute.routing import tables
from medroute.routing.classifier import healthcare_confidence, personal_confidence, score


def test_scores_are_pure():
    text = "What are the symptoms of diabetes and any latest research?"
    assert healthcare_confidence(text) == healthcare_confidence(text)
    assert personal_confidence(text) == personal_confidence(text)
    assert score("healthcare", text) == healthcare_confidence(text)


def test_healthcare_question_with_news_intent():
    text = "What are the symptoms of diabetes and any latest research?"
    # 3 keyword hits capped at 0.5, + question bonus + news bonus
    assert healthcare_confidence(text) == pytest.approx(0.95)
    assert personal_confidence(text) == tables.PERSONAL_HEALTH_OVERLAP_SCORE


def test_keyword_spam_capped_without_bonuses():
    text = "cancer diabetes asthma malaria dengue obesity influenza"
    assert healthcare_confidence(text) == pytest.approx(tables.KEYWORD_SCORE_CAP)


def test_keyword_density_below_cap():
    assert healthcare_confidence("cholesterol") == pytest.approx(1 / 2.5)


def test_score_clamped_to_one():
    text = "Should I get a cancer screening test for diabetes? Latest news on blood pressure"
    assert healthcare_confidence(text) == 1.0


def test_screening_bonus():
    # "checkup" is a keyword (0.4) and a screening intent (+0.4)
    assert healthcare_confidence("annual checkup") == pytest.approx(0.8)


def test_short_keywords_need_whole_words():
    assert healthcare_confidence("asdf qwer") == 0.0
    assert healthcare_confidence("go to the ER") == pytest.approx(0.4)


def test_long_keywords_match_inside_words():
    # "virus" inside "antivirus", "cholesterol" inside "hypercholesterolemia"
    assert healthcare_confidence("antivirus") == pytest.approx(1 / 2.5)
    assert healthcare_confidence("hypercholesterolemia") == pytest.approx(1 / 2.5)


def test_short_keywords_inside_words_do_not_count():
    assert healthcare_confidence("water") == 0.0
    assert healthcare_confidence("whose") == 0.0


def test_personal_both_sets():
    assert personal_confidence("Hi, my name is Sam and I live in Boston") == 0.9


def test_personal_conversational_only():
    assert personal_confidence("hello there, thanks") == 0.7


def test_personal_context_only():
    assert personal_confidence("favorite band?") == 0.8


def test_personal_no_signal_default():
    assert personal_confidence("asdf qwer") == tables.PERSONAL_DEFAULT_SCORE
    assert tables.PERSONAL_DEFAULT_SCORE < tables.ROUTING_THRESHOLD


def test_personal_short_circuits_on_health_terms():
    assert personal_confidence("Hi, my name is Sam and I have diabetes") == 0.2


def test_unknown_domain():
    with pytest.raises(KeyError):
        score("finance", "stocks")

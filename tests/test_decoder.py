import json

import pytest

from studybuddy.modules.flashcards.models import Flashcard, FlashcardSet
from studybuddy.modules.quiz.models import (
    MultipleChoiceQuestion,
    Quiz,
    TrueFalseQuestion,
)
from studybuddy.modules.structured import (
    DecodeError,
    PayloadKind,
    decode,
    decode_flashcards,
    decode_quiz,
)
from studybuddy.modules.structured.stages import (
    FALLBACK_CARD,
    FALLBACK_TITLE,
    repair_json,
    strip_fences,
)

QUIZ = Quiz(
    title="Cells",
    description="Basic cell biology",
    questions=[
        MultipleChoiceQuestion(
            question="Which organelle produces ATP?",
            options=["Nucleus", "Mitochondria", "Ribosome", "Golgi body"],
            correctAnswer="Mitochondria",
            explanation="Cellular respiration happens there.",
        ),
        TrueFalseQuestion(question="Plant cells have walls.", correctAnswer="true"),
    ],
)

CARDS = FlashcardSet(
    title="Chemistry",
    description=None,
    cards=[
        Flashcard(question="What is H2O?", answer="Water", category="Molecules"),
        Flashcard(question="What is NaCl?", answer="Table salt"),
    ],
)


def _cards_json(n):
    return json.dumps(
        {"cards": [{"question": f"Q{i}", "answer": f"A{i}"} for i in range(n)]}
    )


def test_quiz_round_trip():
    assert decode(json.dumps(QUIZ.model_dump()), PayloadKind.QUIZ) == QUIZ


def test_flashcards_round_trip():
    raw = json.dumps(CARDS.model_dump())
    assert decode(raw, "flashcards", len(CARDS.cards)) == CARDS


@pytest.mark.parametrize(
    "wrap",
    [
        "```json\n{}\n```",
        "```\n{}\n```",
        "```{}```",
        "  ```javascript\n{}\n```  ",
    ],
)
def test_fenced_payloads_decode_like_bare_ones(wrap):
    quiz_raw = json.dumps(QUIZ.model_dump())
    cards_raw = json.dumps(CARDS.model_dump())
    assert decode_quiz(wrap.replace("{}", quiz_raw)) == decode_quiz(quiz_raw)
    assert decode_flashcards(wrap.replace("{}", cards_raw), 2) == decode_flashcards(cards_raw, 2)


def test_strip_fences_leaves_plain_text():
    assert strip_fences('  {"a": 1}\n') == '{"a": 1}'


def test_trailing_commas_are_tolerated():
    clean = '{"title": "T", "cards": [{"question": "Q", "answer": "A"}]}'
    sloppy = '{"title": "T", "cards": [{"question": "Q", "answer": "A",},],}'
    assert decode_flashcards(sloppy, 1) == decode_flashcards(clean, 1)


def test_trailing_comma_in_quiz():
    raw = json.dumps(QUIZ.model_dump())
    assert raw.endswith("}]}")
    sloppy = raw[:-2] + ",]}"
    assert decode_quiz(sloppy) == QUIZ


def test_fullwidth_comma_is_normalized():
    raw = '{"title": "T"，"cards": [{"question": "Q", "answer": "A"}]}'
    result = decode_flashcards(raw, 1)
    assert result.title == "T"
    assert result.cards[0].question == "Q"


def test_repair_json():
    assert repair_json('[1, 2, ]') == "[1, 2]"
    assert repair_json('{"a": 1，"b": 2,\n}') == '{"a": 1,"b": 2}'


def test_json_surrounded_by_prose():
    raw = "Sure! Here is your quiz:\n" + json.dumps(QUIZ.model_dump()) + "\nGood luck!"
    assert decode_quiz(raw) == QUIZ


def test_flashcards_padded_to_target():
    result = decode_flashcards(_cards_json(7), 10)
    assert len(result.cards) == 10
    assert [c.question for c in result.cards[:7]] == [f"Q{i}" for i in range(7)]
    fillers = result.cards[7:]
    assert all(c.category == "Additional" for c in fillers)
    assert [c.question for c in fillers] == [
        "Additional question 8 about the topic?",
        "Additional question 9 about the topic?",
        "Additional question 10 about the topic?",
    ]


def test_flashcards_truncated_to_target():
    result = decode_flashcards(_cards_json(15), 10)
    assert [c.question for c in result.cards] == [f"Q{i}" for i in range(10)]


SCRAPE_TEXT = """Here are your cards:
1. "question": "What is H2O?" "answer": "Water"
2. "question": "What is NaCl?" "answer": "Salt"
3. "question": "What is O2?" "answer": "Oxygen"
"""


def test_scrape_fallback_pairs_fields():
    result = decode_flashcards(SCRAPE_TEXT, 3)
    assert [(c.question, c.answer) for c in result.cards] == [
        ("What is H2O?", "Water"),
        ("What is NaCl?", "Salt"),
        ("What is O2?", "Oxygen"),
    ]
    assert all(c.category == "General" for c in result.cards)


def test_scraped_cards_are_then_padded():
    result = decode_flashcards(SCRAPE_TEXT, 5)
    assert [c.category for c in result.cards] == ["General"] * 3 + ["Additional"] * 2


def test_scrape_fallback_without_pairs_uses_placeholder():
    result = decode_flashcards("The model refused to answer.", 1)
    assert result.title == FALLBACK_TITLE
    assert result.description
    assert result.cards == [Flashcard(**FALLBACK_CARD)]


def test_empty_output_still_yields_cards():
    result = decode_flashcards("", 4)
    assert len(result.cards) == 4
    assert result.cards[0].question == FALLBACK_CARD["question"]


def test_quiz_without_json_fails():
    with pytest.raises(DecodeError) as exc:
        decode_quiz("I could not come up with a quiz, sorry.")
    assert exc.value.reason == "invalid-json"


def test_quiz_is_never_scraped():
    with pytest.raises(DecodeError):
        decode_quiz(SCRAPE_TEXT)


def test_broken_quiz_json_fails():
    with pytest.raises(DecodeError):
        decode_quiz('{"title": "Cells", "questions": [{"question": "Which')


def test_long_answer_is_truncated():
    raw = json.dumps({"cards": [{"question": "Q", "answer": "x" * 2000}]})
    card = decode_flashcards(raw, 1).cards[0]
    assert len(card.answer) == 1000


def test_question_and_category_are_truncated():
    raw = json.dumps(
        {"cards": [{"question": "q" * 600, "answer": "A", "category": "c" * 150}]}
    )
    card = decode_flashcards(raw, 1).cards[0]
    assert len(card.question) == 500
    assert len(card.category) == 100


def test_quotes_are_escaped():
    raw = json.dumps({"cards": [{"question": 'Who said "hi"?', "answer": "Bob"}]})
    card = decode_flashcards(raw, 1).cards[0]
    assert card.question == 'Who said \\"hi\\"?'


def test_missing_category_defaults_to_general():
    card = decode_flashcards(_cards_json(1), 1).cards[0]
    assert card.category == "General"


def test_front_back_aliases_and_bare_array():
    raw = json.dumps([{"front": "Term", "back": "Definition"}])
    result = decode_flashcards(raw, 1)
    assert result.cards[0].question == "Term"
    assert result.cards[0].answer == "Definition"
    assert result.title is None


def test_flashcards_key_alias():
    raw = json.dumps({"flashcards": [{"question": "Q", "answer": "A"}]})
    assert decode_flashcards(raw, 1).cards[0].answer == "A"


def test_flashcards_require_positive_count():
    with pytest.raises(ValueError):
        decode_flashcards(_cards_json(1), 0)


def test_quiz_count_is_not_normalized():
    quiz = decode_quiz(json.dumps(QUIZ.model_dump()))
    assert len(quiz.questions) == 2


def test_quiz_question_type_is_inferred():
    raw = json.dumps(
        {
            "title": "Mixed",
            "questions": [
                {"question": "Pick one", "options": ["a", "b", "c", "d"], "correctAnswer": "a"},
                {"question": "Sky is blue", "correctAnswer": True},
            ],
        }
    )
    quiz = decode_quiz(raw)
    assert isinstance(quiz.questions[0], MultipleChoiceQuestion)
    assert isinstance(quiz.questions[1], TrueFalseQuestion)
    assert quiz.questions[1].correctAnswer == "true"


def test_malformed_quiz_questions_are_dropped():
    raw = json.dumps(
        {
            "questions": [
                {"question": "Three options", "type": "multiple-choice",
                 "options": ["a", "b", "c"], "correctAnswer": "a"},
                {"question": "Explain", "type": "short-answer", "correctAnswer": "..."},
                {"question": "Ok?", "type": "true-false", "correctAnswer": "false"},
            ]
        }
    )
    quiz = decode_quiz(raw)
    assert quiz.title == "Quiz"
    assert [q.question for q in quiz.questions] == ["Ok?"]


@pytest.mark.parametrize(
    "raw",
    [
        '{"error": "I cannot do that"}',
        '{"title": "T", "questions": []}',
        '{"title": "T", "questions": "none"}',
        '{"title": "T", "questions": [{"question": "Explain", "type": "short-answer", "correctAnswer": "..."}]}',
    ],
)
def test_quiz_without_valid_questions_fails(raw):
    with pytest.raises(DecodeError) as exc:
        decode_quiz(raw)
    assert exc.value.reason == "invalid-json"
    assert exc.value.raw_text == raw


def test_bare_array_with_trailing_comma_keeps_categories():
    raw = (
        '[{"question": "Q1", "answer": "A1", "category": "Bio"},'
        ' {"question": "Q2", "answer": "A2", "category": "Bio"},]'
    )
    result = decode_flashcards(raw, 2)
    assert result.title is None
    assert [(c.question, c.category) for c in result.cards] == [("Q1", "Bio"), ("Q2", "Bio")]


def test_bare_quiz_array_with_trailing_comma():
    raw = '[{"question": "Ok?", "type": "true-false", "correctAnswer": "true"},]'
    quiz = decode_quiz(raw)
    assert quiz.title == "Quiz"
    assert [q.question for q in quiz.questions] == ["Ok?"]

import json

from tgaudio.telegram import Keyboard, KeyboardButton, build_reply_payload


def _markup(keyboard: Keyboard) -> dict:
    return json.loads(keyboard.to_dict()["reply_markup"])


def test_it_can_be_created() -> None:
    keyboard = Keyboard.create()
    assert isinstance(keyboard, Keyboard)
    assert _markup(keyboard) == {Keyboard.TYPE_INLINE: []}


def test_it_can_have_multiple_rows() -> None:
    reply_markup = _markup(Keyboard.create().add_row())
    assert reply_markup[Keyboard.TYPE_INLINE] == [[]]

    reply_markup = _markup(Keyboard.create().add_row().add_row())
    assert len(reply_markup[Keyboard.TYPE_INLINE]) == 2


def test_it_can_have_multiple_buttons_in_each_row() -> None:
    reply_markup = _markup(Keyboard.create().add_row(KeyboardButton.create("test")))
    assert len(reply_markup[Keyboard.TYPE_INLINE][0]) == 1

    reply_markup = _markup(
        Keyboard.create().add_row(
            KeyboardButton.create("first"),
            KeyboardButton.create("second"),
        )
    )
    assert reply_markup[Keyboard.TYPE_INLINE][0] == [
        {"text": "first"},
        {"text": "second"},
    ]


def test_add_row_returns_same_builder() -> None:
    keyboard = Keyboard.create()
    assert keyboard.add_row() is keyboard
    assert len(keyboard.rows) == 1


def test_rows_keep_insertion_order() -> None:
    keyboard = (
        Keyboard.create()
        .add_row(KeyboardButton.create("a").callback_data("1"))
        .add_row(
            KeyboardButton.create("b").url("https://example.com"),
            KeyboardButton.create("c").callback_data("1"),
        )
    )
    assert _markup(keyboard) == {
        "inline_keyboard": [
            [{"text": "a", "callback_data": "1"}],
            [
                {"text": "b", "url": "https://example.com"},
                {"text": "c", "callback_data": "1"},
            ],
        ]
    }


def test_reply_keyboard_flags() -> None:
    keyboard = (
        Keyboard.create(Keyboard.TYPE_KEYBOARD)
        .one_time_keyboard()
        .resize_keyboard()
        .add_row(
            KeyboardButton.create("Share phone").request_contact(),
            KeyboardButton.create("Share location").request_location(),
        )
    )
    assert _markup(keyboard) == {
        "keyboard": [
            [
                {"text": "Share phone", "request_contact": True},
                {"text": "Share location", "request_location": True},
            ]
        ],
        "one_time_keyboard": True,
        "resize_keyboard": True,
    }


def test_type_switches_markup_key() -> None:
    keyboard = Keyboard.create().type(Keyboard.TYPE_KEYBOARD).add_row()
    assert _markup(keyboard) == {"keyboard": [[]]}


def test_button_drops_unset_fields() -> None:
    button = KeyboardButton.create("x").request_contact(False)
    assert button.to_dict() == {"text": "x"}


def test_button_keeps_empty_inline_query() -> None:
    button = KeyboardButton.create("search").switch_inline_query_current_chat()
    assert button.to_dict() == {
        "text": "search",
        "switch_inline_query_current_chat": "",
    }


def test_build_reply_payload_merges_markup() -> None:
    keyboard = Keyboard.create().add_row(KeyboardButton.create("ok").callback_data("ok"))
    payload = build_reply_payload(
        42, "pick one", keyboard, parse_mode="HTML", reply_to_message_id=None
    )
    assert payload["chat_id"] == 42
    assert payload["text"] == "pick one"
    assert payload["parse_mode"] == "HTML"
    assert "reply_to_message_id" not in payload
    assert json.loads(payload["reply_markup"]) == {
        "inline_keyboard": [[{"text": "ok", "callback_data": "ok"}]]
    }


def test_build_reply_payload_without_keyboard() -> None:
    assert build_reply_payload(1, "hi") == {"chat_id": 1, "text": "hi"}

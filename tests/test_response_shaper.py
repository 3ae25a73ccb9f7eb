import json

import pytest

from quote_assistant.core.response_shaper import find_recommendations_block, shape_pricing_reply


EXAMPLE_REPLY = (
    'Here is my advice.\n\n'
    '{"recommendations":[{"tabId":"tab-1","name":"Basic","costExGST":1000,'
    '"suggestedPriceIncGST":1500,"paymentTerm":12,"reasoning":"fair margin"}],'
    '"textMessageSummary":"Hi, here are your options..."}'
)


def test_example_reply_is_split():
    advice = shape_pricing_reply(EXAMPLE_REPLY)

    assert advice.explanation == "Here is my advice."
    assert len(advice.recommendations) == 1
    assert advice.recommendations[0]["tabId"] == "tab-1"
    assert advice.recommendations[0]["suggestedPriceIncGST"] == 1500
    assert advice.text_message_summary == "Hi, here are your options..."


def test_no_json_keeps_whole_text_as_explanation():
    text = "  Sure, keeping the premium option high makes sense.\nLet's leave prices as they are.  "

    advice = shape_pricing_reply(text)

    assert advice.explanation == text.strip()
    assert advice.recommendations is None
    assert advice.text_message_summary == ""


def test_malformed_json_degrades_to_explanation():
    text = 'My thoughts below.\n{"recommendations": [{"tabId": "tab-1", "name": }], "textMessageSummary": "x"'

    advice = shape_pricing_reply(text)

    assert advice.explanation == text
    assert advice.recommendations is None


def test_malformed_block_with_valid_nested_object_degrades_to_explanation():
    text = 'Advice.\n{"plan": {"recommendations": [{"tabId": "tab-1"}]}, "textMessageSummary": oops}'

    advice = shape_pricing_reply(text)

    assert advice.explanation == text
    assert advice.recommendations is None
    assert advice.text_message_summary == ""


def test_valid_block_after_malformed_block_is_found():
    text = (
        'Draft: {"recommendations": [oops]}\n'
        'Final answer.\n{"recommendations": [{"tabId": "tab-3"}], "textMessageSummary": "Hi"}'
    )

    advice = shape_pricing_reply(text)

    assert advice.explanation == 'Draft: {"recommendations": [oops]}\nFinal answer.'
    assert advice.recommendations == [{"tabId": "tab-3"}]


@pytest.mark.parametrize("value", ['"see above"', "5", '{"tabId": "tab-1"}'])
def test_non_list_recommendations_become_empty_list(value):
    advice = shape_pricing_reply('Done. {"recommendations": %s, "textMessageSummary": "Hi"}' % value)

    assert advice.explanation == "Done."
    assert advice.recommendations == []
    assert advice.text_message_summary == "Hi"


def test_object_without_key_is_ignored():
    text = 'Use {curly} phrasing sparingly. Example config: {"foo": 1}. That is all.'

    advice = shape_pricing_reply(text)

    assert advice.explanation == text
    assert advice.recommendations is None


def test_earlier_brace_text_does_not_swallow_block():
    text = (
        'Think of it as {good, better, best}.\n'
        '{"recommendations": [{"tabId": "tab-2", "name": "Mid"}], "textMessageSummary": "Hi"}\n'
        'Let me know what you think {happy to adjust}.'
    )

    advice = shape_pricing_reply(text)

    assert advice.explanation == "Think of it as {good, better, best}."
    assert advice.recommendations == [{"tabId": "tab-2", "name": "Mid"}]
    assert advice.text_message_summary == "Hi"


def test_fenced_block_is_unwrapped():
    text = (
        'Go with the middle option.\n\n```json\n'
        '{"recommendations": [{"tabId": "tab-1"}], "textMessageSummary": "Hello"}\n```'
    )

    advice = shape_pricing_reply(text)

    assert advice.explanation == "Go with the middle option."
    assert advice.recommendations == [{"tabId": "tab-1"}]


def test_missing_fields_default_to_empty():
    advice = shape_pricing_reply('Done. {"recommendations": null}')

    assert advice.explanation == "Done."
    assert advice.recommendations == []
    assert advice.text_message_summary == ""


def test_reshaping_serialized_advice_is_stable():
    first = shape_pricing_reply(EXAMPLE_REPLY)
    payload = {
        "recommendations": first.recommendations,
        "textMessageSummary": first.text_message_summary,
    }
    re_embedded = f"{first.explanation}\n\n{json.dumps(payload, indent=2)}"

    second = shape_pricing_reply(re_embedded)

    assert second.explanation == first.explanation
    assert second.recommendations == first.recommendations
    assert second.text_message_summary == first.text_message_summary


def test_find_block_returns_span():
    text = 'abc {"recommendations": []} def'

    start, end, parsed = find_recommendations_block(text)

    assert text[start:end] == '{"recommendations": []}'
    assert parsed == {"recommendations": []}


def test_to_dict_uses_wire_names():
    advice = shape_pricing_reply(EXAMPLE_REPLY)

    assert set(advice.to_dict()) == {"explanation", "recommendations", "textMessageSummary"}

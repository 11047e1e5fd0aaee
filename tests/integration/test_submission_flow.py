from __future__ import annotations

from typing import Any

from formbuilder import Form, Invalid, SubmittedData, Valid
from formbuilder.settings import Settings


def _contact_schema() -> dict[str, Any]:
    return {
        "id": "contact",
        "class": "stacked",
        "action": "/contact",
        "fieldsets": [
            {
                "legend": "Who are you?",
                "fields": [
                    {"name": "txtEmail", "label": "Email", "dataMap": "email", "rules": {"required": True, "email": True}},
                    {"name": "txtConfirm", "label": "Confirm", "rules": {"equalTo": "txtEmail"}},
                    {
                        "name": "rdoContact",
                        "label": "Contact me by",
                        "type": "radio",
                        "dataMap": "channel",
                        "values": [
                            {"name": "Email", "value": "email", "id": "rdoEmail", "label": "Email"},
                            {"name": "Phone", "value": "phone", "id": "rdoPhone", "label": "Phone"},
                        ],
                    },
                    {"name": "chkNews", "type": "checkbox", "label": "Newsletter", "value": "yes", "dataMap": "news"},
                    {"name": "txtAge", "label": "Age", "dataMap": "age", "rules": {"digits": True}},
                ],
            },
            {"class": "submit", "fields": [{"name": "btnSend", "type": "submit", "value": "Send"}]},
        ],
    }


def test_two_forms_on_one_page_only_process_their_own_submission() -> None:
    settings = Settings(_env_file=None)
    contact = Form(_contact_schema(), settings=settings)
    newsletter = Form(
        {"id": "newsletter", "fieldsets": [{"fields": [{"name": "txtNews", "rules": {"required": True}}]}]},
        settings=settings,
    )
    request = SubmittedData.from_encoded("frmID=newsletter&txtNews=", method="POST")

    assert newsletter.submitted(request) is True
    assert contact.submitted(request) is False
    assert 'class="error"' in newsletter.render(request)
    assert 'class="error"' not in contact.render(request)


def test_failed_submission_rerenders_values_and_errors() -> None:
    form = Form(_contact_schema(), settings=Settings(_env_file=None))
    request = SubmittedData.from_encoded(
        "frmID=contact&txtEmail=ada%40analytical.org&txtConfirm=ada%40other.org&rdoContact=phone&txtAge=old",
        method="POST",
    )

    assert form.submitted(request)
    result = form.validate(request)

    assert isinstance(result, Invalid)
    assert result.errors == ["'Confirm' does not match 'txtEmail'.", "'Age' is not a valid number."]

    markup = form.render(request)
    assert '<form id="contact" class="stacked" action="/contact" method="POST">' in markup
    assert 'value="ada@analytical.org"' in markup
    assert '<input checked type="radio" id="rdoPhone" name="rdoContact"' in markup
    assert '<label class="error" for="txtAge">\'Age\' is not a valid number.</label>' in markup


def test_successful_submission_produces_data_map() -> None:
    form = Form(_contact_schema(), settings=Settings(_env_file=None))
    request = SubmittedData.from_encoded(
        "frmID=contact&txtEmail=ada%40analytical.org&txtConfirm=ada%40analytical.org&rdoContact=email&txtAge=36",
        method="POST",
    )

    assert form.validate(request) == Valid()
    assert form.get_data_map() == {"email": "ada@analytical.org", "channel": "email", "news": None, "age": "36"}

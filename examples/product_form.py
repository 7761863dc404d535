#!/usr/bin/env python3
"""
Example script demonstrating Winnow form parsing.

Shows how to declare a form, parse URL-encoded input, read accumulated
errors and handle structural errors raised for malformed payloads.
"""

from winnow import (
    FieldSpec,
    Form,
    FormConfig,
    StructuralError,
    halts,
    validates,
)

TAKEN_TITLES = {"Lamp"}


class ProductForm(Form):
    config = FormConfig.for_framework()

    title = FieldSpec(max_length=16, scrub=["strip", "squeeze"])
    description = FieldSpec(multiline=True, required=False, scrub="squeeze_lines")
    colour = FieldSpec(multiple=True, values=["black", "white", "red"])
    gift = FieldSpec(values=["yes", "no"])
    no_gift_note = halts(lambda form: form.gift == "no")
    gift_note = FieldSpec(required=False, max_length=140)

    @validates("title", error="taken")
    def title_is_unique(self, title):
        return title not in TAKEN_TITLES


def show(label: str, form: Form) -> None:
    print(f"\n== {label} ==")
    if form.is_valid():
        print(f"valid: {form.to_dict()}")
        return
    for error in form.errors:
        print(f"  - {error}")


def main():
    """Parse a few submissions against ProductForm."""

    form = ProductForm().parse(
        "authenticity_token=abc&title=++Desk++lamp&description=Brass"
        "&colour=black&colour=white&gift=no&gift_note=ignored"
    )
    show("valid submission", form)

    form = ProductForm().parse(
        "title=A+title+that+is+far+too+long&description=&colour=green&gift=yes&gift_note="
    )
    show("invalid submission", form)

    form = ProductForm().parse("title=Lamp&description=&gift=yes&gift_note=For+Ada")
    show("cross-field check", form)

    try:
        ProductForm().parse("title=Desk&description=&gift=yes&gift_note=&price=10")
    except StructuralError as e:
        print(f"\n== structural error ==\n  {e}")


if __name__ == "__main__":
    main()

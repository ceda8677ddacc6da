import click

from tsutsumi import FormData, ListFormat, MultipartFile


def main() -> None:
    form = FormData.from_map(
        {
            "user": {"name": "gakido", "tags": ["a", "b"]},
            "active": True,
            "avatar": MultipartFile.from_bytes(b"\x89PNG...", filename="a.png", content_type="image/png"),
        },
        list_format=ListFormat.MULTI_COMPATIBLE,
    )
    for name, value in form.fields:
        click.echo(f"{name} = {value}")
    body = form.read()
    click.secho(f"{len(body)} bytes (declared {form.length})", fg="green")
    click.echo(body.decode("utf-8", errors="replace"))


if __name__ == "__main__":
    main()

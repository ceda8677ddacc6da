import asyncio
import sys

import click

from tsutsumi import FormData, MultipartFile


async def post_form(host: str, path: str, form: FormData) -> bytes:
    reader, writer = await asyncio.open_connection(host, 80)
    head = (
        f"POST {path} HTTP/1.1\r\n"
        f"Host: {host}\r\n"
        f"Content-Type: {form.content_type}\r\n"
        f"Content-Length: {form.length}\r\n"
        "Connection: close\r\n\r\n"
    )
    writer.write(head.encode("ascii"))
    async for chunk in form.finalize():
        writer.write(chunk)
        await writer.drain()
    response = await reader.read()
    writer.close()
    await writer.wait_closed()
    return response


async def main(path: str) -> None:
    form = FormData()
    form.add_field("foo", "bar")
    form.add_field("greeting", "Grüße")
    form.add_file("file", MultipartFile.from_path(path))
    click.secho(f"Uploading {form.length} bytes, boundary {form.boundary}", fg="cyan")

    response = await post_form("httpbin.org", "/post", form)
    status = response.split(b"\r\n", 1)[0].decode("latin-1")
    click.secho(f"Upload status: {status}", fg="green")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else __file__))

from __future__ import annotations

import argparse
import asyncio

from travel_admin.app.application.list_controller import EntityListController, ListStatus
from travel_admin.app.bootstrap import build_list_controller
from travel_admin.app.config import AppConfig
from travel_admin.app.infrastructure.errors.error_mapper import ErrorMapper
from travel_admin.app.infrastructure.errors.exceptions import ListControllerError
from travel_admin.app.resources import RESOURCES
from travel_admin.app.state import SessionContext
from travel_admin.app.ui.components.mutation_feedback import ConsoleFeedback
from travel_admin.app.ui.table_printer import format_pager, print_table

COMMANDS = (
    "Commands: n=next, p=prev, f=first, l=last, g=goto, s=sort, /=filter, "
    "a=add, e=edit, x=delete, r=reload, t=theme, b=back"
)


async def _prompt(label: str) -> str:
    # Runs in a worker thread so pending deletes keep progressing.
    return (await asyncio.to_thread(input, label)).strip()


def render(controller: EntityListController) -> None:
    resource = controller.resource
    print(f"\n=== {resource.title} === theme={controller.context.theme}")
    print(f"{resource.filter_placeholder} [{controller.filter_value()}]")
    print_table(resource.title, controller.headers(), controller.rows())

    pager = controller.pagination()
    if pager.visible:
        print(f"<< < {format_pager(pager.entries, pager.active_page)} > >>")


async def run_listing(controller: EntityListController) -> None:
    await controller.load()
    while True:
        if controller.status is ListStatus.ERROR:
            print(f"[error] {ErrorMapper.to_display_message(controller.error)}")
            command = await _prompt("r=retry, b=back: ")
            if command == "r":
                await controller.retry()
                continue
            if command == "b":
                return
            continue

        render(controller)
        print(COMMANDS)
        command = (await _prompt("cmd: ")).lower()
        try:
            if not await _dispatch(controller, command):
                return
        except (ListControllerError, ValueError) as error:
            print(f"[guardrail] {error}")


async def _dispatch(controller: EntityListController, command: str) -> bool:
    if command == "n":
        controller.next_page()
    elif command == "p":
        controller.previous_page()
    elif command == "f":
        controller.first_page()
    elif command == "l":
        controller.last_page()
    elif command == "g":
        requested = await _prompt("page: ")
        if requested.isdigit():
            controller.go_to_page(int(requested))
    elif command == "s":
        field_key = await _prompt(f"sort by ({', '.join(c.field_key for c in controller.resource.columns)}): ")
        controller.toggle_sort(field_key)
    elif command == "/":
        controller.set_filter(controller.resource.filter_field, await _prompt(f"{controller.resource.filter_placeholder} "))
    elif command == "a":
        controller.open_create()
    elif command == "e":
        controller.open_edit(await _prompt("id: "))
    elif command == "x":
        await _delete_with_confirmation(controller, await _prompt("id: "))
    elif command == "r":
        await controller.load()
    elif command == "t":
        controller.context = controller.context.toggle_theme()
    elif command == "b":
        return False
    else:
        print("Unknown command.")
    return True


async def _delete_with_confirmation(controller: EntityListController, record_id: str) -> None:
    if not record_id:
        return
    pending = controller.request_delete(record_id)
    print(f"{pending.title} {pending.description}")
    if (await _prompt("type 'delete' to confirm: ")).lower() != "delete":
        controller.cancel_delete()
        print("Cancelled.")
        return
    ticket = controller.confirm_delete(record_id)
    await ticket.wait()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Travel admin list console")
    parser.add_argument("resource", choices=sorted(RESOURCES), nargs="?", default="booking")
    parser.add_argument("--token", default=None, help="bearer token for the data store")
    parser.add_argument("--env-file", default=".env")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    config = AppConfig.from_env(args.env_file)
    context = SessionContext(access_token=args.token, theme=config.theme)
    controller = build_list_controller(
        args.resource,
        config=config,
        context=context,
        navigate=lambda route: print(f"[navigate] {route}"),
        feedback=ConsoleFeedback(),
    )
    asyncio.run(run_listing(controller))


if __name__ == "__main__":
    main()

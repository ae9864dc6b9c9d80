"""CLI entry point for the barcode count tool."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from .app import BarcodeApp
from .config import load_config
from .db import SQLiteStorage
from .models import SECTION_NAMES, TABS
from .reconcile import parse_count, summarize
from .store import StateStore

_YES = {"s", "si", "sí", "y", "yes"}


def _ask(message: str) -> bool:
    try:
        answer = input(f"{message} [s/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in _YES


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="barcode",
        description="Gestión de Barcode: recuento de stock y altas/bajas UM",
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="Ruta del archivo de configuración (TOML)",
    )
    parser.add_argument(
        "--db", type=str, default=None,
        help="Ruta de la base de datos de estado",
    )
    parser.add_argument(
        "--verbose", "-v", action="count", default=0,
        help="Más detalle en el log (-vv para depuración)",
    )

    sub = parser.add_subparsers(dest="command")

    upload_parser = sub.add_parser("upload", help="Cargar un CSV de stock")
    upload_parser.add_argument("file", help="Archivo CSV")

    list_parser = sub.add_parser("list", help="Mostrar los productos")
    list_parser.add_argument(
        "--all", action="store_true", help="Ignorar el filtro de búsqueda"
    )
    list_parser.add_argument("--json", action="store_true", help="Salida en JSON")
    list_parser.add_argument(
        "--wide", "-w", action="store_true",
        help="Mostrar también Pub., Estak, UxC, cajas, PVP y valor",
    )

    search_parser = sub.add_parser("search", help="Filtrar por código de artículo")
    search_parser.add_argument("term", nargs="?", default="", help="Texto a buscar")

    set_parser = sub.add_parser("set", help="Fijar el stock real de un producto")
    set_parser.add_argument("id", help="Id del producto")
    set_parser.add_argument("value", help="Unidades contadas")

    inc_parser = sub.add_parser("inc", help="Sumar 1 al stock real")
    inc_parser.add_argument("id", help="Id del producto")

    dec_parser = sub.add_parser("dec", help="Restar 1 al stock real")
    dec_parser.add_argument("id", help="Id del producto")

    sub.add_parser("status", help="Resumen del recuento")

    tab_parser = sub.add_parser("tab", help="Cambiar la pestaña activa")
    tab_parser.add_argument("tab", choices=TABS)

    new_parser = sub.add_parser("new", help="Iniciar una nueva barcode")
    new_parser.add_argument("--yes", "-y", action="store_true", help="No preguntar")

    finish_parser = sub.add_parser(
        "finish", help="Finalizar la barcode: exportar a PDF y borrar"
    )
    finish_parser.add_argument("--yes", "-y", action="store_true", help="No preguntar")
    finish_parser.add_argument(
        "--pdf", type=str, default=None, metavar="FILE", help="Archivo PDF de salida"
    )

    export_parser = sub.add_parser("export", help="Exportar a PDF sin borrar")
    export_parser.add_argument(
        "--pdf", type=str, default=None, metavar="FILE", help="Archivo PDF de salida"
    )

    um_parser = sub.add_parser("um", help="Gestión UM Altas/Bajas")
    um_sub = um_parser.add_subparsers(dest="um_command")

    um_list = um_sub.add_parser("list", help="Mostrar las secciones")
    um_list.add_argument("--json", action="store_true", help="Salida en JSON")

    um_toggle = um_sub.add_parser("toggle", help="Abrir o cerrar una sección")
    um_toggle.add_argument("section", help=f"Sección ({', '.join(SECTION_NAMES)})")

    um_add = um_sub.add_parser("add", help="Añadir un elemento vacío")
    um_add.add_argument("section")

    um_set = um_sub.add_parser("set", help="Editar un elemento")
    um_set.add_argument("section")
    um_set.add_argument("id")
    group = um_set.add_mutually_exclusive_group(required=True)
    group.add_argument("--code", type=str, default=None)
    group.add_argument("--description", type=str, default=None)

    um_rm = um_sub.add_parser("rm", help="Eliminar un elemento")
    um_rm.add_argument("section")
    um_rm.add_argument("id")

    return parser


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None or (args.command == "um" and args.um_command is None):
        parser.print_help()
        sys.exit(1)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    storage = None
    try:
        config = load_config(args.config)
        storage = SQLiteStorage(args.db or config.storage.db_path)
        store = StateStore(storage)
        confirm = (lambda message: True) if getattr(args, "yes", False) else _ask
        app = BarcodeApp(store, config, confirm=confirm)
        _dispatch(app, args)
    except (ValueError, FileNotFoundError, ImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        if storage is not None:
            storage.close()


def _dispatch(app: BarcodeApp, args) -> None:
    store = app.store

    match args.command:
        case "upload":
            count = app.upload(args.file)
            print(f"{count} productos cargados.")
        case "list":
            _cmd_list(app, args)
        case "search":
            store.set_search(args.term)
            shown = len(store.visible_products())
            print(f"Filtro: {args.term!r} ({shown} de {len(store.state.products)} productos)")
        case "set":
            _print_product(store.set_physical_count(args.id, parse_count(args.value)))
        case "inc":
            _print_product(store.increment(args.id))
        case "dec":
            _print_product(store.decrement(args.id))
        case "status":
            _cmd_status(app)
        case "tab":
            store.set_tab(args.tab)
            print(f"Pestaña activa: {args.tab}")
        case "new":
            if app.new_count():
                print("Nueva barcode iniciada.")
            else:
                print("Cancelado.")
        case "finish":
            pdf_path = app.finish_count(args.pdf)
            if pdf_path is None:
                print("Cancelado.")
            else:
                print(f"PDF guardado: {pdf_path}")
        case "export":
            print(f"PDF guardado: {app.export(args.pdf)}")
        case "um":
            _cmd_um(app, args)


def _print_product(p) -> None:
    print(
        f"[{p.id}] {p.cod_art}  stock: {p.stock_uds}  real: {p.stock_real}  "
        f"dif: {p.diff_units} uds / {p.diff_euros:.2f} €"
    )


def _cmd_list(app: BarcodeApp, args) -> None:
    store = app.store
    products = store.state.products if args.all else store.visible_products()

    if args.json:
        print(json.dumps([p.to_dict() for p in products], ensure_ascii=False, indent=2))
        return

    if not products:
        print("No hay productos.")
        return
    if store.state.search_term and not args.all:
        print(f"Filtro: {store.state.search_term!r}")
    header = f"{'Id':>4}  {'Cód. Art.':<12} {'Descripción':<30} "
    if args.wide:
        header += (
            f"{'Pub.':<5} {'Estak #8':<9} {'UxC Tamaño':<11} "
            f"{'Cajas':>6} {'PVP':>8} {'Valor €':>10} "
        )
    header += f"{'Stock':>6} {'Real':>6} {'Dif.':>6} {'Dif. €':>10}"
    print(header)

    for p in products:
        line = f"{p.id:>4}  {p.cod_art:<12} {p.descripcion[:30]:<30} "
        if args.wide:
            line += (
                f"{p.pub:<5} {p.estak:<9} {p.uxc_tamano:<11} "
                f"{p.stock_cajas:>6} {p.pvp_precio:>8.2f} {p.stock_valor:>10.2f} "
            )
        line += (
            f"{p.stock_uds:>6} {p.stock_real:>6} {p.diff_units:>6} "
            f"{p.diff_euros:>10.2f}"
        )
        print(line)


def _cmd_status(app: BarcodeApp) -> None:
    state = app.store.state
    s = summarize(state.products)
    print(f"Pestaña activa: {state.active_tab}")
    print(f"Productos: {s.products}  contados: {s.counted}  con diferencia: {s.with_difference}")
    print(f"Diferencia total: {s.diff_units} uds / {s.diff_euros:.2f} €")
    open_sections = [name for name, items in state.um_sections.items() if items]
    if open_sections:
        print(f"Secciones abiertas: {', '.join(open_sections)}")


def _cmd_um(app: BarcodeApp, args) -> None:
    store = app.store

    match args.um_command:
        case "list":
            sections = store.state.um_sections
            if args.json:
                data = {
                    name: [item.to_dict() for item in items]
                    for name, items in sections.items()
                }
                print(json.dumps(data, ensure_ascii=False, indent=2))
                return
            for name, items in sections.items():
                marker = "▾" if items else "▸"
                print(f"{marker} {name}")
                for item in items:
                    print(f"    [{item.id}] {item.code:<12} {item.description}")
        case "toggle":
            store.toggle_section(args.section)
            state = "abierta" if store.state.um_sections[args.section] else "cerrada"
            print(f"Sección {args.section}: {state}")
        case "add":
            item_id = store.add_item(args.section)
            print(f"Elemento añadido: {item_id}")
        case "set":
            field, value = (
                ("code", args.code) if args.code is not None
                else ("description", args.description)
            )
            store.update_item(args.section, args.id, field, value)
            print(f"Elemento {args.id} actualizado.")
        case "rm":
            store.remove_item(args.section, args.id)
            print(f"Elemento {args.id} eliminado.")

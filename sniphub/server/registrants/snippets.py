from argparse import Namespace
from typing import Any, Sequence, Tuple

from pynvim_pp.buffer import Buffer
from pynvim_pp.lib import decode, encode
from pynvim_pp.logging import log
from pynvim_pp.nvim import Nvim
from pynvim_pp.operators import operator_marks
from pynvim_pp.preview import set_preview
from pynvim_pp.types import NoneType
from pynvim_pp.window import Window
from std2.argparse import ArgparseError, ArgParser
from std2.pickle.encoder import new_encoder

from ...hub.types import ParseError, TransportError
from ...lang import LANG
from ...registry import NAMESPACE, atomic, rpc
from ...shared.types import SnippetEdit
from ...snippets.types import ContextError
from ..host import NvimHost, complete_items, word_classifier
from ..rt_types import Stack

_ENCODER = new_encoder[Sequence[SnippetEdit]](Sequence[SnippetEdit])


async def _reload(stack: Stack, silent: bool) -> None:
    uri = stack.settings.hub.api_url
    try:
        await stack.engine.init()
    except (TransportError, ParseError) as e:
        log.warn("%s", e)
        await Nvim.write(LANG("load failed", uri=uri, e=str(e)), error=True)
    else:
        if not silent:
            count = len(stack.engine.catalog)
            await Nvim.write(LANG("snippets loaded", count=count, uri=uri))


@rpc()
async def _load_snips(stack: Stack) -> None:
    await _reload(stack, silent=True)


atomic.exec_lua(f"{NAMESPACE}.{_load_snips.method}()", ())


async def _edits(stack: Stack, auto: bool) -> Tuple[str, Sequence[SnippetEdit]]:
    win = await Window.get_current()
    buf = await win.get_buf()
    row, col = await win.get_cursor()
    ft = await buf.filetype()
    line, *_ = await buf.get_lines(lo=row, hi=row + 1)

    # nvim cursor is a utf-8 byte offset
    char_col = len(decode(encode(line)[:col]))
    edits = await stack.engine.trigger_snippets(
        word_classifier(stack.settings.match.unifying_chars),
        filetype=ft,
        row=row,
        col=char_col,
        line=line,
        auto=auto,
    )
    return line, edits


async def _checked_edits(stack: Stack, auto: bool) -> Tuple[str, Sequence[SnippetEdit]]:
    try:
        return await _edits(stack, auto=auto)
    except ContextError as e:
        log.warn("%s", e)
        await Nvim.write(LANG("bad context", e=str(e)), error=True)
        return "", ()


@rpc()
async def trigger(stack: Stack, auto: bool) -> Any:
    _, edits = await _checked_edits(stack, auto=auto)
    return _ENCODER(edits)


@rpc()
async def _trigger_menu(stack: Stack) -> None:
    line, edits = await _checked_edits(stack, auto=False)
    if edits:
        col, items = complete_items(line, edits=edits)
        await Nvim.fn.complete(NoneType, col, items)


@rpc()
async def files(stack: Stack) -> Sequence[str]:
    buf = await Buffer.get_current()
    ft = await buf.filetype()
    return stack.engine.snippet_files(ft)


def _parse_args(args: Sequence[str]) -> Namespace:
    parser = ArgParser()
    sub_parsers = parser.add_subparsers(dest="action", required=True)

    sub_parsers.add_parser("reload")
    sub_parsers.add_parser("ls")
    sub_parsers.add_parser("create")

    return parser.parse_args(args)


async def _selection(buf: Buffer, visual: bool) -> str:
    if visual:
        (lo, _), (hi, _) = await operator_marks(buf=buf, visual_type=None)
        lines = await buf.get_lines(lo=lo, hi=hi + 1)
    else:
        row, _ = await (await Window.get_current()).get_cursor()
        lines = await buf.get_lines(lo=row, hi=row + 1)
    linefeed = await buf.linefeed()
    return linefeed.join(lines)


@rpc()
async def snips(stack: Stack, args: Sequence[str], visual: bool) -> None:
    buf = await Buffer.get_current()
    ft = await buf.filetype()

    try:
        ns = _parse_args(args)
    except ArgparseError as e:
        await Nvim.write(e, error=True)

    else:
        if ns.action == "reload":
            await _reload(stack, silent=False)

        elif ns.action == "ls":
            fts = {*stack.engine.filetypes(ft)}
            preview = tuple(
                f"{s.prefix}\t{s.filetype}\t{s.location}"
                for s in stack.engine.catalog.filter_by_filetype(fts)
            )
            if preview:
                await set_preview(syntax="", preview=preview)
            else:
                await Nvim.write(LANG("no snippets found", filetype=ft))

        elif ns.action == "create":
            text = await _selection(buf, visual=visual)
            try:
                await stack.engine.create_snippet(NvimHost(), filetype=ft, text=text)
            except (TransportError, ParseError) as e:
                log.warn("%s", e)
                msg = LANG("create failed", filetype=ft, e=str(e))
                await Nvim.write(msg, error=True)

        else:
            assert False


_LUA = f"""
vim.api.nvim_create_user_command("Sniphub", function(o)
  {NAMESPACE}.{snips.method}(o.fargs, o.range > 0)
end, {{nargs = "+", range = true}})
"""

atomic.exec_lua(_LUA, ())

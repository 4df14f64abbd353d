# karm

`karm` is a small Python library with no dependencies. It provides layout
geometry, a widget tree that lays itself out, some text helpers, and readers
for several low-level binary formats.

## Modules

**Layout geometry**

- `karm.flow` defines `Vec2`, `Rect`, `Orien` and `Flow`. A flow direction
  maps the logical edges start, end, top and bottom onto physical
  coordinates. It has `get_*` and `set_*` methods for each edge, plus
  `relative()` and `vec()`.
- `karm.align` defines `Hint`, which can be `MIN`, `PREFERRED` or `MAX`, and
  `Align`, a set of combinable flags.
  - `Align.apply()` places one rectangle inside another.
  - `Align.size()` reports the size an aligned child asks for.
- `karm.dock` defines `Dock`. `Dock.apply(inner, outer)` returns two things:
  the placed rectangle and the space that is left over.
- `karm.spacing` defines two classes:
  - `Spacing`, which supports `shrink`, `grow` and `all`.
  - `Radius`, which holds corner radii and supports `clamp`.

**Widget tree**

- `karm.node` defines the tree itself.
  - The node classes are `Node`, `Proxy`, `Group`, `View`, `Empty` and
    `StackLayout`.
  - The reactive classes are `React`, `StateNode` and its `State` handle.
  - `Supplier` makes a value available to descendants through `query()`.
  - The helper functions are `empty()`, `stack()` and `state()`.
- `karm.widgets` provides layout widgets:
  - Flows: `hflow` and `vflow`, with `grow` and `spacer` items.
  - Alignment: `align`, `center`, `hcenter`, `vcenter`, `hcenter_fill` and
    `vcenter_fill`.
  - Sizing: `min_size`, `max_size` and `pin_size`.
  - Docking: `dock`, plus `dock_top`, `dock_bottom`, `dock_start` and
    `dock_end`.
  - `spacing`.

**Time and animation**

- `karm.timing` defines `Span` and `Stamp`. Both hold unsigned 64-bit
  microsecond values.
  - `Span` arithmetic wraps around modulo 2**64.
  - Adding an infinite `Span` to a `Stamp` gives the end of time.
  - The end of time absorbs any span that is added to it or taken from it.
- `karm.easing` provides the usual easing curves, such as `cubic_in_out` and
  `bounce_out`, and an `Easing` wrapper.

**Text**

- `karm.emit.Emit` writes to any object that has a `write()` method. It adds
  an indented line break before the next string whenever one was requested.
- `karm.expr` provides composable matchers such as `single`, `word`,
  `char_range`, `chain`, `either`, `one_or_more` and `separator`.
  - They work over any scanner object that has `curr()`, `next()` and
    `skip(text)`.
- `karm.cstd` provides ASCII classification (`isalpha`, `ispunct` and the
  like), `tolower`/`toupper`, and `div`. `div` truncates toward zero.

**Binary formats**

- `karm.ttf` reads TrueType and OpenType fonts through `Font.load`.
  - It gives font and glyph metrics.
  - It gives simple glyph outlines. These go to any sink with `move_to`,
    `line_to`, `quad_to` and `close`, such as `PathRecorder`.
- `karm.elf.Image` lists the sections and program headers of 64-bit
  little-endian ELF images.
- `karm.acpi` parses four kinds of table: `Rsdp`, `Sdth`, `Madt`, `Mcfg` and
  `Hpet`.
- `karm.efi` covers:
  - UEFI status codes: `from_status` and `check_status`, which raise
    `EfiError`.
  - Enumerations, protocol GUIDs and `text_attr`.
  - `Time.parse` and `MemoryDescriptor.parse`.
- `karm.handover` covers boot handover payloads.
  - `Payload.parse` reads a payload.
  - `Builder` writes one.
  - It also provides tags, request helpers and `valid()`.

## Examples

Centre a rectangle inside another:

```python
from karm.flow import Flow, Rect
from karm.align import Align

outer = Rect(0, 0, 100, 100)
inner = Rect(0, 0, 20, 10)
print(Align.CENTER.apply(Flow.LEFT_TO_RIGHT, inner, outer))
# Rect(x=40, y=45, width=20, height=10)
```

Lay out a horizontal flow that contains a spacer:

```python
from karm.flow import Rect, Vec2
from karm.node import empty
from karm.widgets import hflow, spacer

left, right = empty(Vec2(10, 10)), empty(Vec2(20, 10))
root = hflow(left, spacer(), right, gaps=4)
root.layout(Rect(0, 0, 100, 10))
print(right.bound())  # Rect(x=80, y=0, width=20, height=10)
```

Build a handover payload and read it back:

```python
from karm.handover import Builder, Tag

builder = Builder(bytearray(4096))
builder.agent("loader")
builder.add(Tag.KERNEL, start=0x100000, size=0x2000)
payload = builder.finalize()
print(payload.agent_name(), hex(payload.find_tag(Tag.KERNEL).end()))
```

Add time:

```python
from karm.timing import Span, Stamp

deadline = Stamp.epoch() + Span.from_secs(5)
```

## What it does not do

The widget tree only computes sizes and lays out rectangles. It has no
painting, no input events and no window or host loop, so nothing is ever
drawn on screen.

The font reader does not draw composite glyphs. Instead it logs a warning.

The ELF, ACPI, EFI and handover modules parse and build bytes in memory. They
do not talk to firmware or hardware.

## Installation and tests

```
pip install .
pip install .[test]
pytest
```
"""
Block models for sketchlogic.

This module defines the wire-level record of a single block line and the
decoded, nested representation used by the rest of the application.
"""

import hashlib
import json
import re
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Union
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..errors import CycleError
from .color import Color
from .spec import BoundSpec, Spec

# Characters Gson escapes by default when writing logic files
_GSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "=": "\\u003d",
    "'": "\\u0027",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

# A parameter that references a reporter block, e.g. "@19"
BLOCK_REFERENCE = re.compile(r"^@(\d+)$")


def gson_escape(text: str) -> str:
    for char, escaped in _GSON_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


class RawBlockRecord(BaseModel):
    """
    One block as stored in a logic file, one JSON object per line.

    Pointers use -1 as the "none" sentinel.
    """

    model_config = ConfigDict(populate_by_name=True)

    color: int = Field(..., description="Signed 32-bit ARGB color")
    id: int = Field(..., ge=0, description="Block id, written as a decimal string")
    next_block: int = Field(-1, alias="nextBlock", description="Id of the next block or -1")
    op_code: str = Field(..., alias="opCode", description="The operation of the block")
    parameters: List[str] = Field(default_factory=list, description="Positional arguments")
    spec: str = Field("", description="The raw display template")
    sub_stack1: int = Field(-1, alias="subStack1", description="Start of the first nested chain or -1")
    sub_stack2: int = Field(-1, alias="subStack2", description="Start of the second nested chain or -1")
    ret_type: str = Field(" ", alias="type", description="Return type tag")
    type_name: str = Field("", alias="typeName", description="Type name tag")

    @field_serializer("id")
    def _id_as_string(self, value: int) -> str:
        return str(value)

    @classmethod
    def from_json_line(cls, line: str) -> "RawBlockRecord":
        return cls.model_validate_json(line)

    def to_json_line(self) -> str:
        """Serialize the record the way the editor writes it."""
        data = self.model_dump(by_alias=True)
        return gson_escape(json.dumps(data, ensure_ascii=False, separators=(",", ":")))


class Block(BaseModel):
    """
    A decoded block.

    Substacks are exclusively owned by this block. Arguments that are reporter
    blocks live inside ``spec.arguments``.
    """

    id: int = Field(default=0, ge=0, description="The id of this block")
    next_block: Optional[int] = Field(
        default=None,
        description="The id of the next block, None at the end of the chain"
    )
    sub_stack1: Optional["Blocks"] = Field(
        default=None,
        description="The first nested chain (e.g. the body of an if)"
    )
    sub_stack2: Optional["Blocks"] = Field(
        default=None,
        description="The second nested chain (e.g. the else body of an if-else)"
    )
    color: Color = Field(..., description="The color of this block")
    op_code: str = Field(..., description="The opcode of this block")
    spec: BoundSpec = Field(..., description="The parsed spec bound to this block's arguments")
    ret_type: str = Field(default=" ", description="The return type of this block")
    type_name: str = Field(default="", description="The type name of this block")

    @classmethod
    def build(
        cls,
        op_code: str,
        spec: str,
        arguments: Sequence[Union[str, "Block"]] = (),
        color: Union[Color, int] = 0,
        ret_type: str = " ",
        type_name: str = "",
        sub_stack1: Optional["Blocks"] = None,
        sub_stack2: Optional["Blocks"] = None,
    ) -> "Block":
        """
        Convenience constructor that parses and binds ``spec``.

        The id is left at 0; ``Blocks.append`` assigns the real one.
        """
        if not isinstance(color, Color):
            color = Color.from_signed(color)
        return cls(
            color=color,
            op_code=op_code,
            spec=Spec.parse(spec).bind(list(arguments)),
            ret_type=ret_type,
            type_name=type_name,
            sub_stack1=sub_stack1,
            sub_stack2=sub_stack2,
        )

    @property
    def category(self):
        """The palette category of this block, see ``sketchlogic.category``."""
        from ..category import categorize
        return categorize(self)

    @property
    def arguments(self) -> List[Union[str, "Block"]]:
        return self.spec.arguments

    def substacks(self) -> List["Blocks"]:
        return [stack for stack in (self.sub_stack1, self.sub_stack2) if stack is not None]

    def iter_ids(self) -> Iterator[int]:
        """Yield the id of this block and of every block it owns."""
        yield self.id
        for argument in self.spec.argument_blocks():
            yield from argument.iter_ids()
        for stack in self.substacks():
            yield from stack.iter_ids()

    def iter_literal_references(self) -> Iterator[int]:
        """
        Yield the ids named by literal ``@<id>`` string arguments.

        These decoded as plain text because no block had that id, so no block
        may be given one of them.
        """
        for argument in self.spec.arguments:
            if isinstance(argument, str):
                match = BLOCK_REFERENCE.match(argument)
                if match is not None:
                    yield int(match.group(1))
            else:
                yield from argument.iter_literal_references()
        for stack in self.substacks():
            yield from stack.iter_literal_references()

    def outline(self) -> Dict[str, Any]:
        """An id-independent description of this block and everything it owns."""
        return {
            "op_code": self.op_code,
            "spec": self.spec.spec.reconstruct(),
            "color": self.color.value,
            "type": self.ret_type,
            "type_name": self.type_name,
            "arguments": [
                argument if isinstance(argument, str) else argument.outline()
                for argument in self.spec.arguments
            ],
            "sub_stack1": self.sub_stack1.outline() if self.sub_stack1 is not None else None,
            "sub_stack2": self.sub_stack2.outline() if self.sub_stack2 is not None else None,
        }


class Blocks(BaseModel):
    """
    A chain of blocks linked through ``next_block``, starting at ``starting_id``.
    """

    starting_id: Optional[int] = Field(
        default=None,
        description="Id of the first block of the chain, None when empty"
    )
    blocks: Dict[int, Block] = Field(
        default_factory=dict,
        description="Chain members keyed by id"
    )

    @classmethod
    def from_chain(cls, blocks: Iterable[Block]) -> "Blocks":
        """Link ``blocks`` in the given order, keeping their ids."""
        chain = cls()
        previous: Optional[Block] = None
        for block in blocks:
            if previous is None:
                chain.starting_id = block.id
            else:
                previous.next_block = block.id
            block.next_block = None
            chain.blocks[block.id] = block
            previous = block
        return chain

    def __len__(self) -> int:
        return len(self.blocks)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self.blocks

    def get(self, block_id: int) -> Optional[Block]:
        return self.blocks.get(block_id)

    def is_empty(self) -> bool:
        return self.starting_id is None

    def chain(self) -> Iterator[Block]:
        """
        Iterate the blocks in execution order.

        Raises:
            CycleError: If the next pointers loop back on themselves
        """
        seen: Set[int] = set()
        current = self.starting_id
        while current is not None:
            if current in seen:
                raise CycleError("Block chain loops back on itself", block_id=current)
            seen.add(current)
            block = self.blocks.get(current)
            if block is None:
                return
            yield block
            current = block.next_block

    def to_list(self) -> List[Block]:
        return list(self.chain())

    @property
    def head(self) -> Optional[Block]:
        if self.starting_id is None:
            return None
        return self.blocks.get(self.starting_id)

    @property
    def tail(self) -> Optional[Block]:
        last = None
        for block in self.chain():
            last = block
        return last

    def iter_ids(self) -> Iterator[int]:
        """Yield every id in the chain, including nested substacks and argument blocks."""
        for block in self.chain():
            yield from block.iter_ids()

    def iter_literal_references(self) -> Iterator[int]:
        """Yield the ids named by literal ``@<id>`` arguments anywhere in the chain."""
        for block in self.chain():
            yield from block.iter_literal_references()

    def append(self, block: Block) -> int:
        """
        Append ``block`` to the end of the chain.

        The new id is the tail's id plus one (1 for an empty chain). When that id
        is already taken somewhere in this chain or its nested blocks, or is named
        by a literal ``@<id>`` argument, the id after the largest one in use is
        taken instead.

        Returns:
            The id assigned to the block
        """
        tail = self.tail
        used = set(self.iter_ids())
        reserved = set(self.iter_literal_references()) | set(block.iter_literal_references())
        nested = set(block.iter_ids()) - {block.id}
        new_id = tail.id + 1 if tail is not None else 1
        if new_id in used | reserved | nested:
            new_id = max(used | reserved | nested | {block.id}) + 1

        block.id = new_id
        block.next_block = None
        if tail is None:
            self.starting_id = new_id
        else:
            tail.next_block = new_id
        self.blocks[new_id] = block
        return new_id

    def predecessor_of(self, block_id: int) -> Optional[Block]:
        """Find the block whose next pointer is ``block_id`` by scanning the chain."""
        for block in self.chain():
            if block.next_block == block_id:
                return block
        return None

    def remove(self, block_id: int) -> bool:
        """
        Unlink and delete the block with ``block_id`` from the chain.

        Returns:
            False if the id is not in the chain or nothing points to it
        """
        block = self.blocks.get(block_id)
        if block is None:
            return False

        if block_id == self.starting_id:
            self.starting_id = block.next_block
        else:
            predecessor = self.predecessor_of(block_id)
            if predecessor is None:
                return False
            predecessor.next_block = block.next_block

        del self.blocks[block_id]
        return True

    def outline(self) -> List[Dict[str, Any]]:
        return [block.outline() for block in self.chain()]

    def content_hash(self) -> str:
        """
        Calculate a stable hash of the chain that ignores block ids.

        Two chains hash equally when they hold the same blocks, arguments and
        nesting in the same order.
        """
        outline_json = json.dumps(self.outline(), sort_keys=True, separators=(',', ':'))
        return hashlib.sha256(outline_json.encode('utf-8')).hexdigest()


# Resolve the forward references between BoundSpec, Block and Blocks
BoundSpec.model_rebuild(_types_namespace={"Block": Block, "Blocks": Blocks})
Block.model_rebuild()
Blocks.model_rebuild()

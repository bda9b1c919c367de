"""
Block graph codec for sketchlogic.

Converts the flat, id-addressed block records of a logic file container into
nested Blocks chains and back.

On the wire, records are laid out depth-first: a block is followed by its
argument blocks, then by its first substack, then by its second substack, and
only then by the next block of its own chain.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set, Union

from ..config import config
from ..errors import BlockSpecError, CycleError, NestingDepthError, SpecError, StructuralError
from ..models import Block, Blocks, Color, RawBlockRecord, Spec
from ..models.block import BLOCK_REFERENCE

NO_BLOCK = -1


class BlockGraphCodec:
    """
    Decodes flat record lists into Blocks and encodes them back.

    A codec instance holds no state between calls; each ``decode``/``encode``
    works on its own lookup tables.
    """

    def __init__(self, max_depth: Optional[int] = None):
        """
        Initialize the codec.

        Args:
            max_depth: Deepest substack/argument nesting accepted by ``decode``.
                       Defaults to ``codec.max_depth`` from the configuration.
        """
        self.max_depth = max_depth if max_depth is not None else config.max_depth

    # Decoding

    def decode(self, records: Sequence[RawBlockRecord], container: Optional[str] = None) -> Blocks:
        """
        Decode a container's flat record list into a Blocks chain.

        The chain starts at the first record in physical order.

        Args:
            records: The records in file order
            container: The container header, used to tag errors

        Returns:
            The decoded chain; empty when ``records`` is empty

        Raises:
            StructuralError: On duplicate ids, dangling pointers, cycles or excessive nesting
            BlockSpecError: When a block's spec cannot be parsed or bound
        """
        if not records:
            return Blocks()

        pool: Dict[int, RawBlockRecord] = {}
        for record in records:
            if record.id in pool:
                raise StructuralError("Duplicate block id", block_id=record.id, container=container)
            pool[record.id] = record

        state = _DecodeState(pool, container, self.max_depth)
        try:
            blocks = state.decode_chain(records[0].id, depth=0)
        except RecursionError:
            # max_depth is set higher than the interpreter's recursion limit allows
            raise NestingDepthError(
                "Nesting exceeds the interpreter recursion limit",
                container=container,
            ) from None

        orphans = set(pool) - state.visited
        if orphans:
            logging.warning(
                f"Dropped {len(orphans)} unreachable block(s) from {container or 'container'}: "
                f"{sorted(orphans)}"
            )

        return blocks

    # Encoding

    def encode(self, blocks: Blocks, renumber: Optional[bool] = None) -> List[RawBlockRecord]:
        """
        Flatten a Blocks chain into records in depth-first wire order.

        Args:
            blocks: The chain to encode
            renumber: Assign ids 1..n in emission order instead of keeping the
                      existing ones. Defaults to ``codec.renumber_on_save``.

        Returns:
            The records, starting with the head of the chain
        """
        if renumber is None:
            renumber = config.renumber_on_save

        allocator = _IdAllocator(blocks, renumber)
        records: List[RawBlockRecord] = []
        self._flatten_chain(blocks, allocator, records)
        return records

    def _flatten_chain(self, blocks: Blocks, allocator: "_IdAllocator", out: List[RawBlockRecord]) -> int:
        """Append the records of ``blocks`` to ``out`` and return the new starting id."""
        starting_id = NO_BLOCK
        previous: Optional[RawBlockRecord] = None
        for block in blocks.chain():
            current = self._flatten_block(block, allocator, out)
            if previous is None:
                starting_id = current.id
            else:
                previous.next_block = current.id
            previous = current
        return starting_id

    def _flatten_block(self, block: Block, allocator: "_IdAllocator", out: List[RawBlockRecord]) -> RawBlockRecord:
        """Append the record of ``block`` followed by everything it owns; next_block is left at -1."""
        block_id = allocator.assign(block)
        children: List[RawBlockRecord] = []

        parameters: List[str] = []
        for argument in block.spec.arguments:
            if isinstance(argument, str):
                parameters.append(argument)
            else:
                argument_record = self._flatten_block(argument, allocator, children)
                parameters.append(f"@{argument_record.id}")

        sub_stack1 = NO_BLOCK
        if block.sub_stack1 is not None:
            sub_stack1 = self._flatten_chain(block.sub_stack1, allocator, children)

        sub_stack2 = NO_BLOCK
        if block.sub_stack2 is not None:
            sub_stack2 = self._flatten_chain(block.sub_stack2, allocator, children)

        record = RawBlockRecord(
            color=block.color.to_signed(),
            id=block_id,
            next_block=NO_BLOCK,
            op_code=block.op_code,
            parameters=parameters,
            spec=block.spec.spec.reconstruct(),
            sub_stack1=sub_stack1,
            sub_stack2=sub_stack2,
            ret_type=block.ret_type,
            type_name=block.type_name,
        )
        out.append(record)
        out.extend(children)
        return record


class _DecodeState:
    """Lookup table and visited guard for one decode call."""

    def __init__(self, pool: Dict[int, RawBlockRecord], container: Optional[str], max_depth: int):
        self.pool = pool
        self.container = container
        self.max_depth = max_depth
        self.visited: Set[int] = set()

    def _fetch(self, block_id: int, referenced_by: Optional[int], what: str) -> RawBlockRecord:
        record = self.pool.get(block_id)
        if record is None:
            raise StructuralError(
                f"{what} points to missing block {block_id}",
                block_id=referenced_by,
                container=self.container,
            )
        if block_id in self.visited:
            raise CycleError(
                f"{what} points to block {block_id}, which was already decoded",
                block_id=referenced_by,
                container=self.container,
            )
        self.visited.add(block_id)
        return record

    def decode_chain(self, starting_id: int, depth: int, parent: Optional[int] = None) -> Blocks:
        if depth > self.max_depth:
            raise NestingDepthError(
                f"Nesting deeper than {self.max_depth} levels",
                block_id=parent,
                container=self.container,
            )

        blocks = Blocks(starting_id=starting_id)
        record = self._fetch(starting_id, parent, "Substack" if parent is not None else "Chain start")
        while True:
            block = self.decode_block(record, depth)
            blocks.blocks[block.id] = block
            if block.next_block is None:
                return blocks
            record = self._fetch(block.next_block, block.id, "Next block")

    def decode_block(self, record: RawBlockRecord, depth: int) -> Block:
        arguments: List[Union[str, Block]] = []
        for parameter in record.parameters:
            arguments.append(self._decode_argument(parameter, record, depth))

        try:
            spec = Spec.parse(record.spec).bind(arguments)
        except SpecError as e:
            raise BlockSpecError(e, block_id=record.id, container=self.container) from e

        return Block(
            id=record.id,
            next_block=record.next_block if record.next_block >= 0 else None,
            sub_stack1=self._decode_substack(record.sub_stack1, record.id, depth),
            sub_stack2=self._decode_substack(record.sub_stack2, record.id, depth),
            color=Color.from_signed(record.color),
            op_code=record.op_code,
            spec=spec,
            ret_type=record.ret_type,
            type_name=record.type_name,
        )

    def _decode_substack(self, starting_id: int, parent: int, depth: int) -> Optional[Blocks]:
        if starting_id < 0:
            return None
        return self.decode_chain(starting_id, depth + 1, parent=parent)

    def _decode_argument(self, parameter: str, record: RawBlockRecord, depth: int) -> Union[str, Block]:
        match = BLOCK_REFERENCE.match(parameter)
        if match is None or int(match.group(1)) not in self.pool:
            return parameter

        if depth + 1 > self.max_depth:
            raise NestingDepthError(
                f"Nesting deeper than {self.max_depth} levels",
                block_id=record.id,
                container=self.container,
            )

        argument = self._fetch(int(match.group(1)), record.id, "Argument")
        if argument.next_block >= 0:
            raise StructuralError(
                f"Argument block {argument.id} has a next block",
                block_id=record.id,
                container=self.container,
            )
        return self.decode_block(argument, depth + 1)


class _IdAllocator:
    """
    Hands out the ids written by ``encode``.

    Existing ids are kept unless already handed out in this encoding; clashes
    get ids past the largest one in the chain. Ids named by literal ``@<id>``
    arguments are never handed out, or they would decode as block references.
    """

    def __init__(self, blocks: Blocks, renumber: bool):
        self.renumber = renumber
        self.taken: Set[int] = set(blocks.iter_literal_references())
        self.next_free = 1 if renumber else max(blocks.iter_ids(), default=0) + 1

    def assign(self, block: Block) -> int:
        if self.renumber or block.id in self.taken:
            while self.next_free in self.taken:
                self.next_free += 1
            block_id = self.next_free
            self.next_free += 1
        else:
            block_id = block.id
        self.taken.add(block_id)
        return block_id


def decode(records: Sequence[RawBlockRecord], container: Optional[str] = None) -> Blocks:
    """Decode ``records`` with a codec using the configured limits."""
    return BlockGraphCodec().decode(records, container)


def encode(blocks: Blocks, renumber: Optional[bool] = None) -> List[RawBlockRecord]:
    """Encode ``blocks`` with a codec using the configured limits."""
    return BlockGraphCodec().encode(blocks, renumber)

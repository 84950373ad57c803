"""Two views over one YAML source.

The structural view is the node tree produced by PyYAML's composer and is
used for lookups and validation. The token view holds the scanned tokens
with their exact source spans and is the only thing edits are applied to;
rendering splices rewritten tokens back into the original text, so nothing
outside a rewritten span changes.

A node and its token are linked by the source offset where they end.
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml
from yaml.composer import ComposerError
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode
from yaml.resolver import Resolver

STR_TAG = "tag:yaml.org,2002:str"

# Characters that cannot start a plain scalar.
PLAIN_INDICATORS = "-?:,[]{}#&*!|>'\"%@`"
FLOW_INDICATORS = ",[]{}"
# Characters a YAML stream may only carry escaped: C1 controls, line
# separators, surrogates and non-characters.
ESCAPED_CHARS = re.compile("[\x7f-\x9f\u2028\u2029\ud800-\udfff\ufffe\uffff]")

_resolver = Resolver()

class AliasNode(Node):
    """An alias occurrence in the structural view.

    PyYAML's composer hands back the anchored node itself for an alias,
    which would make the alias indistinguishable from its anchor. This
    wrapper keeps the alias's own position and a reference to the target.
    """
    id = "alias"

    def __init__(self, anchor, target, start_mark, end_mark):
        super().__init__(target.tag, target.value, start_mark, end_mark)
        self.anchor = anchor
        self.target = target

class CatalogLoader(yaml.SafeLoader):
    """SafeLoader whose composer keeps aliases as `AliasNode`."""

    def compose_node(self, parent, index):
        if self.check_event(yaml.AliasEvent):
            event = self.peek_event()
            target = super().compose_node(parent, index)
            return AliasNode(event.anchor, target, event.start_mark, event.end_mark)
        return super().compose_node(parent, index)

    def compose_mapping_node(self, anchor):
        node = super().compose_mapping_node(anchor)
        seen = set()
        for key_node, _ in node.value:
            if not isinstance(key_node, ScalarNode):
                continue
            key = (key_node.tag, key_node.value)
            if key in seen:
                raise ComposerError(
                    "while composing a mapping", node.start_mark,
                    f"found duplicate key {key_node.value!r}", key_node.start_mark,
                )
            seen.add(key)
        return node

@dataclass
class SourceToken:
    """A token of the source text, rewritable in place."""
    kind: str
    start: int
    end: int
    source: str
    value: Optional[str] = None
    style: Optional[str] = None
    text: Optional[str] = None

    @property
    def is_scalar(self) -> bool:
        return self.kind == "scalar"

    @property
    def modified(self) -> bool:
        return self.text is not None

    def render(self) -> str:
        return self.source if self.text is None else self.text

_TOKEN_KINDS = {
    yaml.ScalarToken: "scalar",
    yaml.AliasToken: "alias",
}

class TokenView:
    """Scalar and alias tokens of a source, indexed by end offset."""

    def __init__(self, source: str):
        self.source = source
        self.tokens: List[SourceToken] = []
        self._by_end: Dict[int, SourceToken] = {}
        for token in yaml.scan(source, Loader=CatalogLoader):
            kind = _TOKEN_KINDS.get(type(token))
            if kind is None:
                continue
            start, end = token.start_mark.index, token.end_mark.index
            item = SourceToken(
                kind=kind,
                start=start,
                end=end,
                source=source[start:end],
                value=token.value,
                style=getattr(token, "style", None),
            )
            self.tokens.append(item)
            self._by_end[end] = item

    def ending_at(self, index: int) -> Optional[SourceToken]:
        return self._by_end.get(index)

    def render(self) -> str:
        """Return the source with every rewritten token spliced in."""
        parts = []
        position = 0
        for token in self.tokens:
            if not token.modified:
                continue
            parts.append(self.source[position:token.start])
            parts.append(token.text)
            position = token.end
        parts.append(self.source[position:])
        return "".join(parts)

def can_be_plain(value: str, in_flow: bool = False) -> bool:
    """Check whether `value` reads back as the same string when written plain."""
    if not value or value != value.strip():
        return False
    if value[0] in PLAIN_INDICATORS:
        return False
    if not value.isprintable():
        return False
    if ": " in value or " #" in value or value.endswith(":"):
        return False
    if in_flow and any(char in value for char in FLOW_INDICATORS):
        return False
    return _resolver.resolve(ScalarNode, value, (True, False)) == STR_TAG

def format_scalar(value: str, style: Optional[str], in_flow: bool = False) -> str:
    """Write `value` in the given quoting style, falling back to double quotes."""
    if style is None and can_be_plain(value, in_flow):
        return value
    if style == "'" and value.isprintable():
        return "'" + value.replace("'", "''") + "'"
    # A JSON string is a valid YAML double-quoted scalar once the characters
    # JSON leaves raw but YAML forbids are escaped too.
    quoted = json.dumps(value, ensure_ascii=False)
    return ESCAPED_CHARS.sub(lambda match: f"\\u{ord(match.group()):04x}", quoted)

def _detach(node: Node, memo: Dict[int, Node]) -> Node:
    """Copy collection nodes with aliases replaced by their targets."""
    if isinstance(node, AliasNode):
        return _detach(node.target, memo)
    if isinstance(node, ScalarNode):
        return ScalarNode(node.tag, node.value, node.start_mark, node.end_mark, style=node.style)
    if id(node) in memo:
        return memo[id(node)]
    if isinstance(node, SequenceNode):
        copy = SequenceNode(node.tag, [], node.start_mark, node.end_mark, flow_style=node.flow_style)
        memo[id(node)] = copy
        copy.value.extend(_detach(item, memo) for item in node.value)
    else:
        copy = MappingNode(node.tag, [], node.start_mark, node.end_mark, flow_style=node.flow_style)
        memo[id(node)] = copy
        copy.value.extend((_detach(key, memo), _detach(value, memo)) for key, value in node.value)
    return copy

class CatalogDocument:
    """A parsed YAML source with a structural view and a token view."""

    def __init__(self, source: str, root: Optional[Node], tokens: TokenView):
        self.source = source
        self.root = root
        self.tokens = tokens

    @classmethod
    def from_text(cls, source: str) -> "CatalogDocument":
        """Parse `source` into both views.

        Raises:
            yaml.YAMLError: If the source is not a single well-formed YAML document.
        """
        root = yaml.compose(source, Loader=CatalogLoader)
        return cls(source, root, TokenView(source))

    def to_plain(self) -> Any:
        """Construct plain Python values from the structural view.

        Construction runs on a detached copy: merge keys are flattened
        in place by PyYAML, and the structural view must keep matching
        the source.

        Raises:
            yaml.YAMLError: If a node cannot be constructed (unknown tag, unhashable key).
        """
        if self.root is None:
            return None
        constructor = CatalogLoader("")
        try:
            return constructor.construct_document(_detach(self.root, {}))
        finally:
            constructor.dispose()

    def pair_in(self, mapping: MappingNode, key: str) -> Optional[Tuple[Node, Node]]:
        """Find the first pair whose key is a string scalar equal to `key`."""
        for key_node, value_node in mapping.value:
            if isinstance(key_node, ScalarNode) and key_node.tag == STR_TAG and key_node.value == key:
                return key_node, value_node
        return None

    def get_in(self, path: Sequence[str]) -> Optional[Node]:
        """Resolve a key path in the structural view.

        Mappings are walked by key, sequences by decimal index. Aliases are
        not followed.
        """
        node = self.root
        for segment in path:
            if isinstance(node, MappingNode):
                pair = self.pair_in(node, segment)
                node = pair[1] if pair else None
            elif isinstance(node, SequenceNode) and segment.isdigit() and int(segment) < len(node.value):
                node = node.value[int(segment)]
            else:
                return None
        return node

    def token_for(self, node: Node) -> Optional[SourceToken]:
        """Return the token that spells `node` in the source, if there is one.

        Empty scalars have no token; a token that starts before the node
        belongs to a neighbour.
        """
        token = self.tokens.ending_at(node.end_mark.index)
        if token is None or token.start < node.start_mark.index:
            return None
        return token

    def set_scalar(self, node: Node, value: str, in_flow: bool = False) -> bool:
        """Rewrite the scalar token of `node` to `value`, keeping its quoting.

        Returns False when the node is not spelled by a single-line scalar
        token (aliases, empty values, collections, block scalars).
        """
        # A collection can end where its last scalar ends.
        if not isinstance(node, ScalarNode):
            return False
        token = self.token_for(node)
        if token is None or not token.is_scalar or token.style in ("|", ">"):
            return False
        if token.value == value and not token.modified:
            return True
        token.text = format_scalar(value, token.style, in_flow=in_flow)
        token.value = value
        return True

    def render(self) -> str:
        return self.tokens.render()

import copy

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Literal, Optional, Union


class TypeOptions(BaseModel):
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    number_step_size: Optional[float] = None
    multiple_values: bool = False
    load_options_method: Optional[str] = None


class PropertyOption(BaseModel):
    name: str
    value: Any
    description: Optional[str] = None
    action: Optional[str] = None


class NodeProperty(BaseModel):
    model_config = ConfigDict(frozen=True)

    display_name: str
    name: str
    type: Literal["options", "string", "number", "boolean", "fixedCollection"] = "string"
    default: Any = None
    required: bool = False
    description: Optional[str] = None
    no_data_expression: bool = False
    type_options: TypeOptions = Field(default_factory=TypeOptions)
    options: List[Union["FixedCollection", PropertyOption]] = Field(default_factory=list)

    def bounds(self):
        return self.type_options.min_value, self.type_options.max_value


class FixedCollection(BaseModel):
    """A named group of sub-properties, repeated when the parent allows multiple values."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    values: List[NodeProperty] = Field(default_factory=list)


NodeProperty.model_rebuild()


class CredentialRef(BaseModel):
    name: str
    required: bool = True


class AuthSpec(BaseModel):
    type: Literal["none", "token"] = "none"
    provider: Optional[str] = None


class ImplPython(BaseModel):
    type: Literal["python"] = "python"
    module: str
    function: str = "run"


class NodeSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    version: str = "1"
    title: str
    category: str
    doc: Optional[str] = None
    subtitle: Optional[str] = None
    icon: Optional[str] = None
    group: List[str] = Field(default_factory=list)
    auth: AuthSpec = AuthSpec()
    credentials: List[CredentialRef] = Field(default_factory=list)
    properties: List[NodeProperty] = Field(default_factory=list)
    load_options: Dict[str, ImplPython] = Field(default_factory=dict)
    impl: ImplPython

    @field_validator("name")
    @classmethod
    def name_must_have_dot(cls, v):
        if "." not in v:
            raise ValueError("name should be namespaced like provider.action")
        return v

    def get_property(self, name: str) -> Optional[NodeProperty]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def default_for(self, path: str) -> Any:
        """Resolve the declared default for a dotted parameter path.

        ``messages.messagesValues`` walks into the default of the ``messages``
        property. Raises ``KeyError`` when nothing is declared for the path.
        """
        head, _, rest = path.partition(".")
        prop = self.get_property(head)
        if prop is None:
            raise KeyError(path)
        value: Any = prop.default
        for part in rest.split(".") if rest else []:
            if not isinstance(value, dict) or part not in value:
                raise KeyError(path)
            value = value[part]
        return copy.deepcopy(value)

from openrouter_nodes.schema import (
    AuthSpec,
    CredentialRef,
    FixedCollection,
    ImplPython,
    NodeProperty,
    NodeSpec,
    PropertyOption,
    TypeOptions,
)

CREDENTIAL_NAME = "openRouterApi"
CHAT_COMPLETION = "chatCompletion"


def _number(display_name, name, default, description, *, min_value=None, max_value=None, step=None):
    return NodeProperty(
        display_name=display_name,
        name=name,
        type="number",
        default=default,
        description=description,
        type_options=TypeOptions(min_value=min_value, max_value=max_value, number_step_size=step),
    )


PROPERTIES = [
    NodeProperty(
        display_name="Operation",
        name="operation",
        type="options",
        no_data_expression=True,
        options=[
            PropertyOption(
                name="Chat Completion",
                value=CHAT_COMPLETION,
                description="Create a chat completion",
                action="Create a chat completion",
            ),
        ],
        default=CHAT_COMPLETION,
    ),
    NodeProperty(
        display_name="Model Name or ID",
        name="model",
        type="options",
        type_options=TypeOptions(load_options_method="getModels"),
        description="Choose from the list, or specify an ID using an expression",
        default="",
        required=True,
    ),
    NodeProperty(
        display_name="Messages",
        name="messages",
        type="fixedCollection",
        type_options=TypeOptions(multiple_values=True),
        default={"messagesValues": [{"role": "user", "content": ""}]},
        options=[
            FixedCollection(
                name="messagesValues",
                display_name="Message",
                values=[
                    NodeProperty(
                        display_name="Role",
                        name="role",
                        type="options",
                        options=[
                            PropertyOption(name="System", value="system"),
                            PropertyOption(name="User", value="user"),
                            PropertyOption(name="Assistant", value="assistant"),
                        ],
                        default="user",
                    ),
                    NodeProperty(
                        display_name="Content",
                        name="content",
                        type="string",
                        default="",
                        description="The content of the message",
                    ),
                ],
            ),
        ],
    ),
    _number(
        "Max Tokens", "max_tokens", 16,
        "The maximum number of tokens to generate in the completion",
        min_value=1,
    ),
    _number(
        "Temperature", "temperature", 1,
        "Controls randomness: Lowering results in less random completions. As the temperature "
        "approaches zero, the model will become deterministic and repetitive.",
        min_value=0, max_value=2, step=0.1,
    ),
    _number(
        "Top P", "top_p", 1,
        "Controls diversity via nucleus sampling: 0.5 means half of all likelihood-weighted "
        "options are considered",
        min_value=0, max_value=1, step=0.1,
    ),
    _number(
        "Frequency Penalty", "frequency_penalty", 0,
        "How much to penalize new tokens based on their existing frequency in the text so far. "
        "Decreases the model's likelihood to repeat the same line verbatim.",
        min_value=-2, max_value=2, step=0.1,
    ),
    _number(
        "Presence Penalty", "presence_penalty", 0,
        "How much to penalize new tokens based on whether they appear in the text so far. "
        "Increases the model's likelihood to talk about new topics.",
        min_value=-2, max_value=2, step=0.1,
    ),
    NodeProperty(
        display_name="Stream",
        name="stream",
        type="boolean",
        default=False,
        description="Whether to stream back partial progress. If set, tokens will be sent as "
        "data-only server-sent events as they become available.",
    ),
]


OPENROUTER_NODE = NodeSpec(
    name="openrouter.chat",
    version="1",
    title="OpenRouter",
    category="AI",
    doc="Interact with OpenRouter API",
    subtitle='={{$parameter["operation"]}}',
    icon="file:openrouter.svg",
    group=["transform"],
    auth=AuthSpec(type="token", provider="openrouter"),
    credentials=[CredentialRef(name=CREDENTIAL_NAME, required=True)],
    properties=PROPERTIES,
    load_options={
        "getModels": ImplPython(module="openrouter_nodes.plugins.openrouter.list_models", function="get_models"),
    },
    impl=ImplPython(module="openrouter_nodes.plugins.openrouter.chat", function="execute"),
)

"""Request and response models for the Dify application API."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Feedback(str, Enum):
    """Rating given to a message."""

    LIKE = "like"
    DISLIKE = "dislike"
    NULL = "null"


class Status(str, Enum):
    """Final state of a workflow run."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    STOPPED = "stopped"


def _mapping(data: Any) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _mismatch(key: str, expected: str, value: Any) -> TypeError:
    return TypeError(f"field {key!r}: expected {expected}, got {type(value).__name__}")


def _str(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _mismatch(key, "string", value)
    return value


def _int(data: dict, key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool):
        raise _mismatch(key, "integer", value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise _mismatch(key, "integer", value)


def _float(data: dict, key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _mismatch(key, "number", value)
    return float(value)


def _bool(data: dict, key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise _mismatch(key, "boolean", value)
    return value


def _list(data: dict, key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _mismatch(key, "array", value)
    return value


def _str_list(data: dict, key: str) -> list[str]:
    items = _list(data, key)
    for item in items:
        if not isinstance(item, str):
            raise _mismatch(key, "array of strings", item)
    return list(items)


def _obj(data: dict, key: str) -> dict:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise _mismatch(key, "object", value)
    return value


@dataclass
class FileInfo:
    """An uploaded file as reported by the server."""

    id: str = ""
    name: str = ""
    size: int = 0
    extension: str = ""
    mime_type: str = ""
    created_by: str = ""
    created_at: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> FileInfo:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            size=_int(data, "size"),
            extension=_str(data, "extension"),
            mime_type=_str(data, "mime_type"),
            created_by=_str(data, "created_by"),
            created_at=_int(data, "created_at"),
        )


@dataclass
class AppInfo:
    """Basic information about an application."""

    name: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> AppInfo:
        data = _mapping(data)
        return cls(
            name=_str(data, "name"),
            description=_str(data, "description"),
            tags=_str_list(data, "tags"),
        )


@dataclass
class _Toggle:
    enabled: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> _Toggle:
        return cls(enabled=_bool(_mapping(data), "enabled"))


@dataclass
class _FormControl:
    label: str = ""
    variable: str = ""
    required: bool = False
    default: str = ""
    max_length: int = 0
    options: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> _FormControl:
        data = _mapping(data)
        return cls(
            label=_str(data, "label"),
            variable=_str(data, "variable"),
            required=_bool(data, "required"),
            default=_str(data, "default"),
            max_length=_int(data, "max_length"),
            options=_str_list(data, "options"),
        )


@dataclass
class _FormItem:
    text_input: _FormControl = field(default_factory=_FormControl)
    paragraph: _FormControl = field(default_factory=_FormControl)
    select: _FormControl = field(default_factory=_FormControl)
    number: _FormControl = field(default_factory=_FormControl)

    @classmethod
    def from_dict(cls, data: Any) -> _FormItem:
        data = _mapping(data)
        return cls(
            text_input=_FormControl.from_dict(_obj(data, "text-input")),
            paragraph=_FormControl.from_dict(_obj(data, "paragraph")),
            select=_FormControl.from_dict(_obj(data, "select")),
            number=_FormControl.from_dict(_obj(data, "number")),
        )


@dataclass
class _ImageUpload:
    detail: str = ""
    enabled: bool = False
    number_limits: int = 0
    transfer_methods: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> _ImageUpload:
        data = _mapping(data)
        return cls(
            detail=_str(data, "detail"),
            enabled=_bool(data, "enabled"),
            number_limits=_int(data, "number_limits"),
            transfer_methods=_str_list(data, "transfer_methods"),
        )


@dataclass
class _FileUpload:
    allowed_file_extensions: list[str] = field(default_factory=list)
    allowed_file_types: list[str] = field(default_factory=list)
    allowed_file_upload_methods: list[str] = field(default_factory=list)
    enabled: bool = False
    image: _ImageUpload = field(default_factory=_ImageUpload)
    number_limits: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> _FileUpload:
        data = _mapping(data)
        return cls(
            allowed_file_extensions=_str_list(data, "allowed_file_extensions"),
            allowed_file_types=_str_list(data, "allowed_file_types"),
            allowed_file_upload_methods=_str_list(data, "allowed_file_upload_methods"),
            enabled=_bool(data, "enabled"),
            image=_ImageUpload.from_dict(_obj(data, "image")),
            number_limits=_int(data, "number_limits"),
        )


@dataclass
class _SystemParameters:
    file_size_limit: int = 0
    image_file_size_limit: int = 0
    audio_file_size_limit: int = 0
    video_file_size_limit: int = 0
    workflow_file_upload_limit: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> _SystemParameters:
        data = _mapping(data)
        return cls(
            file_size_limit=_int(data, "file_size_limit"),
            image_file_size_limit=_int(data, "image_file_size_limit"),
            audio_file_size_limit=_int(data, "audio_file_size_limit"),
            video_file_size_limit=_int(data, "video_file_size_limit"),
            workflow_file_upload_limit=_int(data, "workflow_file_upload_limit"),
        )


@dataclass
class _SensitiveWordAvoidance:
    configs: list = field(default_factory=list)
    enabled: bool = False
    type: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> _SensitiveWordAvoidance:
        data = _mapping(data)
        return cls(
            configs=list(_list(data, "configs")),
            enabled=_bool(data, "enabled"),
            type=_str(data, "type"),
        )


@dataclass
class _TextToSpeech:
    enabled: bool = False
    language: str = ""
    voice: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> _TextToSpeech:
        data = _mapping(data)
        return cls(
            enabled=_bool(data, "enabled"),
            language=_str(data, "language"),
            voice=_str(data, "voice"),
        )


@dataclass
class AppParameter:
    """Configuration parameters of an application."""

    opening_statement: str = ""
    suggested_questions: list[str] = field(default_factory=list)
    suggested_questions_after_answer: _Toggle = field(default_factory=_Toggle)
    speech_to_text: _Toggle = field(default_factory=_Toggle)
    retriever_resource: _Toggle = field(default_factory=_Toggle)
    annotation_reply: _Toggle = field(default_factory=_Toggle)
    user_input_form: list[_FormItem] = field(default_factory=list)
    file_upload: _FileUpload = field(default_factory=_FileUpload)
    system_parameters: _SystemParameters = field(default_factory=_SystemParameters)
    more_like_this: _Toggle = field(default_factory=_Toggle)
    sensitive_word_avoidance: _SensitiveWordAvoidance = field(
        default_factory=_SensitiveWordAvoidance
    )
    text_to_speech: _TextToSpeech = field(default_factory=_TextToSpeech)

    @classmethod
    def from_dict(cls, data: Any) -> AppParameter:
        data = _mapping(data)
        return cls(
            opening_statement=_str(data, "opening_statement"),
            suggested_questions=_str_list(data, "suggested_questions"),
            suggested_questions_after_answer=_Toggle.from_dict(
                _obj(data, "suggested_questions_after_answer")
            ),
            speech_to_text=_Toggle.from_dict(_obj(data, "speech_to_text")),
            retriever_resource=_Toggle.from_dict(_obj(data, "retriever_resource")),
            annotation_reply=_Toggle.from_dict(_obj(data, "annotation_reply")),
            user_input_form=[
                _FormItem.from_dict(item) for item in _list(data, "user_input_form")
            ],
            file_upload=_FileUpload.from_dict(_obj(data, "file_upload")),
            system_parameters=_SystemParameters.from_dict(_obj(data, "system_parameters")),
            more_like_this=_Toggle.from_dict(_obj(data, "more_like_this")),
            sensitive_word_avoidance=_SensitiveWordAvoidance.from_dict(
                _obj(data, "sensitive_word_avoidance")
            ),
            text_to_speech=_TextToSpeech.from_dict(_obj(data, "text_to_speech")),
        )


@dataclass
class FeedbackRequest:
    """Feedback on a message; an empty user falls back to the client's user."""

    message_id: str = ""
    rating: Feedback | str = ""
    user: str = ""
    content: str = ""


@dataclass
class ConversationRenameRequest:
    """Rename a conversation, or let the server generate a name."""

    conversation_id: str = ""
    name: str = ""
    auto_generate: bool = False
    user: str = ""


@dataclass
class ConversationRenameResponse:
    """The conversation after renaming."""

    id: str = ""
    name: str = ""
    inputs: Any = None
    status: str = ""
    introduction: str = ""
    created_at: int = 0
    updated_at: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> ConversationRenameResponse:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            inputs=data.get("inputs"),
            status=_str(data, "status"),
            introduction=_str(data, "introduction"),
            created_at=_int(data, "created_at"),
            updated_at=_int(data, "updated_at"),
        )


@dataclass
class TextToAudioRequest:
    """Text to synthesise; a message id takes precedence over the text."""

    message_id: str = ""
    text: str = ""
    user: str = ""


@dataclass
class AppMeta:
    """Application meta information such as tool icons."""

    tool_icons: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> AppMeta:
        data = _mapping(data)
        return cls(tool_icons=dict(_obj(data, "tool_icons")))


@dataclass
class Conversation:
    """One conversation in a conversation list."""

    id: str = ""
    name: str = ""
    inputs: Any = None
    status: str = ""
    introduction: str = ""
    created_at: int = 0
    updated_at: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Conversation:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            inputs=data.get("inputs"),
            status=_str(data, "status"),
            introduction=_str(data, "introduction"),
            created_at=_int(data, "created_at"),
            updated_at=_int(data, "updated_at"),
        )


@dataclass
class ConversationListResponse:
    """A page of conversations."""

    data: list[Conversation] = field(default_factory=list)
    has_more: bool = False
    limit: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> ConversationListResponse:
        data = _mapping(data)
        return cls(
            data=[Conversation.from_dict(item) for item in _list(data, "data")],
            has_more=_bool(data, "has_more"),
            limit=_int(data, "limit"),
        )


@dataclass
class RetrieverResource:
    """A knowledge segment cited in an answer."""

    position: int = 0
    dataset_id: str = ""
    dataset_name: str = ""
    document_id: str = ""
    document_name: str = ""
    segment_id: str = ""
    score: float = 0.0
    content: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> RetrieverResource:
        data = _mapping(data)
        return cls(
            position=_int(data, "position"),
            dataset_id=_str(data, "dataset_id"),
            dataset_name=_str(data, "dataset_name"),
            document_id=_str(data, "document_id"),
            document_name=_str(data, "document_name"),
            segment_id=_str(data, "segment_id"),
            score=_float(data, "score"),
            content=_str(data, "content"),
        )


@dataclass
class _MessageFile:
    id: str = ""
    type: str = ""
    url: str = ""
    belongs_to: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> _MessageFile:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            type=_str(data, "type"),
            url=_str(data, "url"),
            belongs_to=_str(data, "belongs_to"),
        )


@dataclass
class _AgentThought:
    id: str = ""
    message_id: str = ""
    position: int = 0
    thought: str = ""
    observation: str = ""
    tool: str = ""
    tool_input: str = ""
    created_at: int = 0
    chain_id: Any = None
    files: list = field(default_factory=list)
    tool_labels: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> _AgentThought:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            message_id=_str(data, "message_id"),
            position=_int(data, "position"),
            thought=_str(data, "thought"),
            observation=_str(data, "observation"),
            tool=_str(data, "tool"),
            tool_input=_str(data, "tool_input"),
            created_at=_int(data, "created_at"),
            chain_id=data.get("chain_id"),
            files=list(_list(data, "files")),
            tool_labels=data.get("tool_labels"),
        )


@dataclass
class _HistoryMessage:
    id: str = ""
    conversation_id: str = ""
    inputs: Any = None
    query: str = ""
    message_files: list[_MessageFile] = field(default_factory=list)
    agent_thoughts: list[_AgentThought] = field(default_factory=list)
    answer: str = ""
    created_at: int = 0
    feedback: Any = None
    retriever_resources: list[RetrieverResource] = field(default_factory=list)
    error: Any = None
    parent_message_id: str = ""
    status: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> _HistoryMessage:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            conversation_id=_str(data, "conversation_id"),
            inputs=data.get("inputs"),
            query=_str(data, "query"),
            message_files=[_MessageFile.from_dict(i) for i in _list(data, "message_files")],
            agent_thoughts=[
                _AgentThought.from_dict(i) for i in _list(data, "agent_thoughts")
            ],
            answer=_str(data, "answer"),
            created_at=_int(data, "created_at"),
            feedback=data.get("feedback"),
            retriever_resources=[
                RetrieverResource.from_dict(i) for i in _list(data, "retriever_resources")
            ],
            error=data.get("error"),
            parent_message_id=_str(data, "parent_message_id"),
            status=_str(data, "status"),
        )


@dataclass
class MessageHistory:
    """A page of messages in a conversation, newest first."""

    data: list[_HistoryMessage] = field(default_factory=list)
    limit: int = 0
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> MessageHistory:
        data = _mapping(data)
        return cls(
            data=[_HistoryMessage.from_dict(item) for item in _list(data, "data")],
            limit=_int(data, "limit"),
            has_more=_bool(data, "has_more"),
        )


@dataclass
class File:
    """A file attached to a request, by URL or by upload id."""

    type: str = ""
    transfer_method: str = ""
    url: str = ""
    upload_file_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"type": self.type, "transfer_method": self.transfer_method}
        if self.url:
            body["url"] = self.url
        if self.upload_file_id:
            body["upload_file_id"] = self.upload_file_id
        return body


def _files_field(body: dict[str, Any], files: list[File]) -> None:
    if files:
        body["files"] = [f.to_dict() for f in files]


@dataclass
class ChatRequest:
    """A chat message for chatbot, agent and chatflow applications."""

    query: str = ""
    inputs: dict[str, Any] | None = None
    response_mode: str = ""
    user: str = ""
    conversation_id: str = ""
    files: list[File] = field(default_factory=list)
    auto_generate_name: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query, "inputs": self.inputs}
        if self.response_mode:
            body["response_mode"] = self.response_mode
        body["user"] = self.user
        if self.conversation_id:
            body["conversation_id"] = self.conversation_id
        _files_field(body, self.files)
        if self.auto_generate_name is not None:
            body["auto_generate_name"] = self.auto_generate_name
        return body


@dataclass
class CompletionRequest:
    """A request to a completion application."""

    query: str = ""
    inputs: dict[str, Any] | None = None
    response_mode: str = ""
    user: str = ""
    files: list[File] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query, "inputs": self.inputs}
        if self.response_mode:
            body["response_mode"] = self.response_mode
        body["user"] = self.user
        _files_field(body, self.files)
        return body


@dataclass
class WorkflowRequest:
    """A request to run a workflow application."""

    inputs: dict[str, Any] | None = None
    response_mode: str = ""
    user: str = ""

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"inputs": self.inputs}
        if self.response_mode:
            body["response_mode"] = self.response_mode
        body["user"] = self.user
        return body


@dataclass
class Usage:
    """Model token usage and pricing."""

    prompt_tokens: int = 0
    prompt_unit_price: str = ""
    prompt_price_unit: str = ""
    prompt_price: str = ""
    completion_tokens: int = 0
    completion_unit_price: str = ""
    completion_price_unit: str = ""
    completion_price: str = ""
    total_tokens: int = 0
    total_price: str = ""
    currency: str = ""
    latency: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> Usage:
        data = _mapping(data)
        return cls(
            prompt_tokens=_int(data, "prompt_tokens"),
            prompt_unit_price=_str(data, "prompt_unit_price"),
            prompt_price_unit=_str(data, "prompt_price_unit"),
            prompt_price=_str(data, "prompt_price"),
            completion_tokens=_int(data, "completion_tokens"),
            completion_unit_price=_str(data, "completion_unit_price"),
            completion_price_unit=_str(data, "completion_price_unit"),
            completion_price=_str(data, "completion_price"),
            total_tokens=_int(data, "total_tokens"),
            total_price=_str(data, "total_price"),
            currency=_str(data, "currency"),
            latency=_float(data, "latency"),
        )


@dataclass
class Metadata:
    """Usage and citations attached to an answer."""

    usage: Usage = field(default_factory=Usage)
    retriever_resources: list[RetrieverResource] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Metadata:
        data = _mapping(data)
        return cls(
            usage=Usage.from_dict(_obj(data, "usage")),
            retriever_resources=[
                RetrieverResource.from_dict(i) for i in _list(data, "retriever_resources")
            ],
        )


@dataclass
class _NodeOutputs:
    text: str = ""
    usage: Usage = field(default_factory=Usage)
    finish_reason: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> _NodeOutputs:
        data = _mapping(data)
        return cls(
            text=_str(data, "text"),
            usage=Usage.from_dict(_obj(data, "usage")),
            finish_reason=_str(data, "finish_reason"),
        )


@dataclass
class _ExecutionMetadata:
    total_tokens: int = 0
    total_price: str = ""
    currency: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> _ExecutionMetadata:
        data = _mapping(data)
        return cls(
            total_tokens=_int(data, "total_tokens"),
            total_price=_str(data, "total_price"),
            currency=_str(data, "currency"),
        )


@dataclass
class _Prompt:
    role: str = ""
    text: str = ""
    files: list = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> _Prompt:
        data = _mapping(data)
        return cls(
            role=_str(data, "role"),
            text=_str(data, "text"),
            files=list(_list(data, "files")),
        )


@dataclass
class _ProcessData:
    model_mode: str = ""
    prompts: list[_Prompt] = field(default_factory=list)
    model_provider: str = ""
    model_name: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> _ProcessData:
        data = _mapping(data)
        return cls(
            model_mode=_str(data, "model_mode"),
            prompts=[_Prompt.from_dict(i) for i in _list(data, "prompts")],
            model_provider=_str(data, "model_provider"),
            model_name=_str(data, "model_name"),
        )


@dataclass
class _ChunkData:
    id: str = ""
    workflow_id: str = ""
    sequence_number: int = 0
    created_at: int = 0
    node_id: str = ""
    node_type: str = ""
    title: str = ""
    index: int = 0
    predecessor_node_id: str = ""
    inputs: dict[str, Any] = field(default_factory=dict)
    outputs: _NodeOutputs = field(default_factory=_NodeOutputs)
    status: str = ""
    error: Any = None
    elapsed_time: float = 0.0
    total_tokens: int = 0
    total_steps: int = 0
    finished_at: int = 0
    execution_metadata: _ExecutionMetadata = field(default_factory=_ExecutionMetadata)
    process_data: _ProcessData = field(default_factory=_ProcessData)
    files: list = field(default_factory=list)
    parallel_id: Any = None
    parallel_start_node_id: Any = None
    parent_parallel_id: Any = None
    parent_parallel_start_node_id: Any = None
    iteration_id: Any = None
    loop_id: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> _ChunkData:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            workflow_id=_str(data, "workflow_id"),
            sequence_number=_int(data, "sequence_number"),
            created_at=_int(data, "created_at"),
            node_id=_str(data, "node_id"),
            node_type=_str(data, "node_type"),
            title=_str(data, "title"),
            index=_int(data, "index"),
            predecessor_node_id=_str(data, "predecessor_node_id"),
            inputs=dict(_obj(data, "inputs")),
            outputs=_NodeOutputs.from_dict(_obj(data, "outputs")),
            status=_str(data, "status"),
            error=data.get("error"),
            elapsed_time=_float(data, "elapsed_time"),
            total_tokens=_int(data, "total_tokens"),
            total_steps=_int(data, "total_steps"),
            finished_at=_int(data, "finished_at"),
            execution_metadata=_ExecutionMetadata.from_dict(
                _obj(data, "execution_metadata")
            ),
            process_data=_ProcessData.from_dict(_obj(data, "process_data")),
            files=list(_list(data, "files")),
            parallel_id=data.get("parallel_id"),
            parallel_start_node_id=data.get("parallel_start_node_id"),
            parent_parallel_id=data.get("parent_parallel_id"),
            parent_parallel_start_node_id=data.get("parent_parallel_start_node_id"),
            iteration_id=data.get("iteration_id"),
            loop_id=data.get("loop_id"),
        )


@dataclass
class ChunkChatCompletionResponse:
    """One event of a streamed response."""

    event: str = ""
    task_id: str = ""
    message_id: str = ""
    conversation_id: str = ""
    answer: str = ""
    created_at: int = 0
    id: str = ""
    position: int = 0
    thought: str = ""
    observation: str = ""
    tool: str = ""
    tool_input: str = ""
    message_files: list[str] = field(default_factory=list)
    type: str = ""
    belongs_to: str = ""
    url: str = ""
    metadata: Metadata = field(default_factory=Metadata)
    audio: str = ""
    from_variable_selector: Any = None
    workflow_run_id: str = ""
    data: _ChunkData = field(default_factory=_ChunkData)
    status: str = ""
    code: str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> ChunkChatCompletionResponse:
        data = _mapping(data)
        return cls(
            event=_str(data, "event"),
            task_id=_str(data, "task_id"),
            message_id=_str(data, "message_id"),
            conversation_id=_str(data, "conversation_id"),
            answer=_str(data, "answer"),
            created_at=_int(data, "created_at"),
            id=_str(data, "id"),
            position=_int(data, "position"),
            thought=_str(data, "thought"),
            observation=_str(data, "observation"),
            tool=_str(data, "tool"),
            tool_input=_str(data, "tool_input"),
            message_files=_str_list(data, "message_files"),
            type=_str(data, "type"),
            belongs_to=_str(data, "belongs_to"),
            url=_str(data, "url"),
            metadata=Metadata.from_dict(_obj(data, "metadata")),
            audio=_str(data, "audio"),
            from_variable_selector=data.get("from_variable_selector"),
            workflow_run_id=_str(data, "workflow_run_id"),
            data=_ChunkData.from_dict(_obj(data, "data")),
            status=_str(data, "status"),
            code=_str(data, "code"),
            message=_str(data, "message"),
        )


@dataclass
class ChatCompletionResponse:
    """A complete answer returned in blocking mode."""

    id: str = ""
    task_id: str = ""
    message_id: str = ""
    conversation_id: str = ""
    mode: str = ""
    answer: str = ""
    event: str = ""
    metadata: Metadata = field(default_factory=Metadata)
    created_at: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> ChatCompletionResponse:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            task_id=_str(data, "task_id"),
            message_id=_str(data, "message_id"),
            conversation_id=_str(data, "conversation_id"),
            mode=_str(data, "mode"),
            answer=_str(data, "answer"),
            event=_str(data, "event"),
            metadata=Metadata.from_dict(_obj(data, "metadata")),
            created_at=_int(data, "created_at"),
        )


@dataclass
class _WorkflowRunData:
    id: str = ""
    workflow_id: str = ""
    status: str = ""
    outputs: dict[str, Any] = field(default_factory=dict)
    error: str = ""
    elapsed_time: float = 0.0
    total_tokens: int = 0
    total_steps: int = 0
    created_at: int = 0
    finished_at: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> _WorkflowRunData:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            workflow_id=_str(data, "workflow_id"),
            status=_str(data, "status"),
            outputs=dict(_obj(data, "outputs")),
            error=_str(data, "error"),
            elapsed_time=_float(data, "elapsed_time"),
            total_tokens=_int(data, "total_tokens"),
            total_steps=_int(data, "total_steps"),
            created_at=_int(data, "created_at"),
            finished_at=_int(data, "finished_at"),
        )


@dataclass
class WorkflowResponse:
    """The result of a workflow run in blocking mode."""

    workflow_run_id: str = ""
    task_id: str = ""
    data: _WorkflowRunData = field(default_factory=_WorkflowRunData)

    @classmethod
    def from_dict(cls, data: Any) -> WorkflowResponse:
        data = _mapping(data)
        return cls(
            workflow_run_id=_str(data, "workflow_run_id"),
            task_id=_str(data, "task_id"),
            data=_WorkflowRunData.from_dict(_obj(data, "data")),
        )


@dataclass
class WorkflowStatus:
    """The state of a workflow run."""

    id: str = ""
    workflow_id: str = ""
    status: str = ""
    inputs: str = ""
    outputs: str = ""
    error: str = ""
    total_steps: int = 0
    total_tokens: int = 0
    created_at: str = ""
    finished_at: str = ""
    elapsed_time: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> WorkflowStatus:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            workflow_id=_str(data, "workflow_id"),
            status=_str(data, "status"),
            inputs=_str(data, "inputs"),
            outputs=_str(data, "outputs"),
            error=_str(data, "error"),
            total_steps=_int(data, "total_steps"),
            total_tokens=_int(data, "total_tokens"),
            created_at=_str(data, "created_at"),
            finished_at=_str(data, "finished_at"),
            elapsed_time=_float(data, "elapsed_time"),
        )


@dataclass
class _WorkflowRun:
    id: str = ""
    version: str = ""
    status: str = ""
    error: str = ""
    elapsed_time: float = 0.0
    total_tokens: int = 0
    total_steps: int = 0
    created_at: int = 0
    finished_at: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> _WorkflowRun:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            version=_str(data, "version"),
            status=_str(data, "status"),
            error=_str(data, "error"),
            elapsed_time=_float(data, "elapsed_time"),
            total_tokens=_int(data, "total_tokens"),
            total_steps=_int(data, "total_steps"),
            created_at=_int(data, "created_at"),
            finished_at=_int(data, "finished_at"),
        )


@dataclass
class _EndUser:
    id: str = ""
    type: str = ""
    is_anonymous: bool = False
    session_id: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> _EndUser:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            type=_str(data, "type"),
            is_anonymous=_bool(data, "is_anonymous"),
            session_id=_str(data, "session_id"),
        )


@dataclass
class _WorkflowLogEntry:
    id: str = ""
    workflow_run: _WorkflowRun = field(default_factory=_WorkflowRun)
    created_from: str = ""
    created_by_role: str = ""
    created_by_account: str = ""
    created_by_end_user: _EndUser = field(default_factory=_EndUser)
    created_at: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> _WorkflowLogEntry:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            workflow_run=_WorkflowRun.from_dict(_obj(data, "workflow_run")),
            created_from=_str(data, "created_from"),
            created_by_role=_str(data, "created_by_role"),
            created_by_account=_str(data, "created_by_account"),
            created_by_end_user=_EndUser.from_dict(_obj(data, "created_by_end_user")),
            created_at=_int(data, "created_at"),
        )


@dataclass
class WorkflowLogs:
    """A page of workflow execution logs."""

    page: int = 0
    limit: int = 0
    total: int = 0
    has_more: bool = False
    data: list[_WorkflowLogEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> WorkflowLogs:
        data = _mapping(data)
        return cls(
            page=_int(data, "page"),
            limit=_int(data, "limit"),
            total=_int(data, "total"),
            has_more=_bool(data, "has_more"),
            data=[_WorkflowLogEntry.from_dict(item) for item in _list(data, "data")],
        )
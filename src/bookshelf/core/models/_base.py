from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for request and response bodies.

    Fields are snake_case in Python and camelCase on the wire. Inputs accept
    either spelling; FastAPI serializes response models by alias.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

from tool_directory.models.user import User
from tool_directory.models.profile import Profile
from tool_directory.models.category import Category
from tool_directory.models.use_case import UseCase
from tool_directory.models.tool import Tool, tool_use_cases

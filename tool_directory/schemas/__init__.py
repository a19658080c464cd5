from tool_directory.schemas.enums import Role, PricingModel
from tool_directory.schemas.profile import Profile, ProfileUpdate, RoleUpdate
from tool_directory.schemas.auth import LoginRequest, RegisterRequest, Token, SessionStatus, SessionUser
from tool_directory.schemas.category import Category, CategoryWithUseCases, UseCase
from tool_directory.schemas.tool import Tool, ToolCreate, ToolUpdate, ToolApproval, ToolDetail, ToolFilters, Pagination, ToolList, VendorTools, SearchResult

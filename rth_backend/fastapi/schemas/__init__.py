from rth_backend.fastapi.schemas.admin import (
    AdminLogin,
    ChangePasswordRequest,
    AdminCreate,
    AdminPublic,
    AdminProfile,
    AdminCreated,
    AdminLoginResponse,
    AdminProfileResponse,
    AdminCreateResponse,
    MessageResponse
)
from rth_backend.fastapi.schemas.rth_kecamatan import (
    SortField,
    SortDirection,
    RthKecamatanCreate,
    RthKecamatanUpdate,
    RthKecamatanRead,
    RthKecamatanDetail,
    RthKecamatanResponse,
    RthSummary,
    RthSummaryResponse,
    ClusterListResponse
)

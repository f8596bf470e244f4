from buildings_api.schemas.requests.filter_request import FilterRequest

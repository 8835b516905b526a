# Core package: status lifecycle rules, API client and signup wizard

"""GraphQL documents sent to the Shopify Admin API. Every order query returns at most one order."""

ORDER_FIELDS_FRAGMENT = """
fragment OrderFields on Order {
  id
  name
  processedAt
  email
  displayFinancialStatus
  displayFulfillmentStatus
  tags
  subtotalPriceSet { shopMoney { amount currencyCode } }
  totalShippingPriceSet { shopMoney { amount currencyCode } }
  totalTaxSet { shopMoney { amount currencyCode } }
  totalDiscountsSet { shopMoney { amount currencyCode } }
  totalPriceSet { shopMoney { amount currencyCode } }
  customer {
    firstName
    lastName
    email
  }
  shippingAddress {
    address1
    address2
    city
    provinceCode
    zip
    country
  }
  lineItems(first: 50) {
    edges {
      node {
        id
        title
        quantity
        requiresShipping
        originalUnitPriceSet { shopMoney { amount currencyCode } }
        discountedTotalSet { shopMoney { amount currencyCode } }
        discountAllocations {
          allocatedAmountSet { shopMoney { amount currencyCode } }
        }
        variant {
          title
          product { productType }
        }
      }
    }
  }
  fulfillments(first: 10) {
    createdAt
    displayStatus
    trackingInfo(first: 1) {
      company
      number
      url
    }
    fulfillmentLineItems(first: 50) {
      edges {
        node {
          lineItem { id }
        }
      }
    }
  }
}
"""

# Phone and email lookups resolve the customer first, then take their latest order.
CUSTOMER_LATEST_ORDER_QUERY = ORDER_FIELDS_FRAGMENT + """
query getLatestOrderByCustomer($customerQuery: String!) {
  customers(first: 1, query: $customerQuery) {
    edges {
      node {
        id
        firstName
        lastName
        email
        phone
        orders(first: 1, sortKey: PROCESSED_AT, reverse: true) {
          edges {
            node { ...OrderFields }
          }
        }
      }
    }
  }
}
"""

ORDER_SEARCH_QUERY = ORDER_FIELDS_FRAGMENT + """
query getOrderBySearch($orderQuery: String!) {
  orders(first: 1, sortKey: PROCESSED_AT, reverse: true, query: $orderQuery) {
    edges {
      node { ...OrderFields }
    }
  }
}
"""

ORDER_BY_ID_QUERY = ORDER_FIELDS_FRAGMENT + """
query getOrderById($id: ID!) {
  order(id: $id) { ...OrderFields }
}
"""
